"""Token gate checker: balances and mint price for an account"""

from typing import Any, Dict, Optional
from loguru import logger

from .contracts.base import ContractFactory, TokenContract
from .exceptions import ConfigurationError
from .models import GateState
from .utils import gather_settled, to_count, widen_uint256


class TokenGateChecker:
    """Looks up what an account holds and what it would pay to mint"""

    def __init__(self, contracts: ContractFactory):
        self.contracts = contracts

    async def check_eligibility(
        self,
        account: str,
        token_gate_address: Optional[str],
        token_gated: bool,
        token_contract: TokenContract,
    ) -> GateState:
        """
        Query the token contract (and the gate contract when gating is on)

        The gate contract is never touched when ``token_gated`` is false.
        All queries run concurrently; the result is returned only after each
        of them has settled, and the first failure is re-raised.
        """
        token_gate = None
        if token_gated:
            if not token_gate_address:
                raise ConfigurationError("Token gating is enabled but no gate address is set")
            try:
                token_gate = self.contracts.token_gate(token_gate_address)
            except ValueError as e:
                raise ConfigurationError(f"Invalid token gate address: {token_gate_address!r}") from e

        queries = [
            token_contract.balance_of(account),
            token_contract.mint_price_for(account),
        ]
        if token_gate is not None:
            queries.append(token_gate.balance_of(account))

        results = await gather_settled(*queries)

        fields: Dict[str, Any] = {
            "balance_at_token_contract": to_count(results[0]),
            "mint_price": to_count(results[1]),
        }
        if token_gated:
            # The gate reports a raw uint256 that is widened separately
            fields["total_balance_at_gate_contract"] = widen_uint256(results[2])

        state = GateState(**fields)
        logger.info(
            f"Gate state for {account}: gate={state.total_balance_at_gate_contract} "
            f"balance={state.balance_at_token_contract} price={state.mint_price}"
        )
        return state
