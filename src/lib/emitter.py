"""
HTML emitter for webflow AST

Walks Element trees depth-first and renders HTML text. Elements whose tag
name is a resolved component are replaced by the component's compiled HTML.
"""

from typing import Dict, List, Optional

from ..models.parser import KeyValue
from .log import LOG
from .parser import Element


class Emitter:
    """
    Renders webflow elements to HTML

    Attribute order on every opening tag is fixed:
    style, dataset, id, class, props.
    """

    def __init__(self, components: Optional[Dict[str, str]] = None) -> None:
        """
        Initialize emitter

        Args:
            components: Mapping of component name to compiled HTML
        """
        self.components = components if components is not None else {}

    def render(self, elements: List[Element]) -> str:
        """
        Render top-level elements, one per line

        Args:
            elements: Top-level elements in source order

        Returns:
            HTML fragment with roots joined by a single newline
        """
        html = '\n'.join(self.element_render(element) for element in elements)
        LOG(f"Rendered {len(elements)} top-level elements", level=3)
        return html

    def element_render(self, element: Element) -> str:
        """
        Render one element and its children

        The closing tag is written unless the element is an empty leaf
        terminated by ';' (no content, no children).
        """
        if element.tag_name in self.components:
            LOG(f"Substituting component '{element.tag_name}'", level=3)
            return self.components[element.tag_name]

        html = f"<{element.tag_name}{self.attributes_render(element)}>"
        if element.content:
            html += element.content
        html += ''.join(self.element_render(child) for child in element.children)
        if not element.closed or element.children or element.content:
            html += f"</{element.tag_name}>"
        return html

    def attributes_render(self, element: Element) -> str:
        return (
            self.style_render(element.style)
            + self.dataset_render(element.datasets)
            + self.tokens_render('id', element.ids)
            + self.tokens_render('class', element.classes)
            + self.props_render(element.props)
        )

    def style_render(self, style: List[KeyValue]) -> str:
        if not style:
            return ''
        declarations = ';'.join(f"{key}:{value}" for key, value in style)
        return f' style="{declarations}"'

    def dataset_render(self, datasets: List[KeyValue]) -> str:
        return ''.join(f' data-{key}="{value}"' for key, value in datasets)

    def tokens_render(self, attribute: str, tokens: List[str]) -> str:
        """Render id/class tokens as one space-joined attribute"""
        if not tokens:
            return ''
        return f' {attribute}="{" ".join(tokens)}"'

    def props_render(self, props: List[KeyValue]) -> str:
        return ''.join(f' {key}="{value}"' for key, value in props)
