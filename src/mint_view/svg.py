"""Helpers for turning generated SVG parts into displayable images"""

import base64

from .decoder import IMAGE_URI_PREFIX

VIEWBOX = "0 0 1024 1024"


def svg_from_svg_part(svg_part: str, tag: str, color: str = "") -> str:
    """Wrap an SVG part (a set of <defs>) into a complete document that uses ``tag``"""
    return (
        f'<svg viewBox="{VIEWBOX}" xmlns="http://www.w3.org/2000/svg">\n'
        f"{svg_part}\n"
        f'<use href="#{tag}" fill="{color}" />\n'
        "</svg>"
    )


def svg_image_from_svg_part(svg_part: str, tag: str, color: str = "") -> str:
    """Same as svg_from_svg_part, returned as an image data URI"""
    svg = svg_from_svg_part(svg_part, tag, color)
    return IMAGE_URI_PREFIX + base64.b64encode(svg.encode("utf-8")).decode("ascii")
