"""
XML Node Reader

Loads OLX files into ElementTree elements. Tag names are normalized here,
once, so the rest of the pipeline only ever looks up lower-case tags.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Union

from ..errors import MalformedXmlError


def normalize_tags(root: ET.Element) -> ET.Element:
    """Strip namespaces and lower-case every tag in place"""
    for elem in root.iter():
        if isinstance(elem.tag, str):
            elem.tag = elem.tag.split('}')[-1].lower()
    return root


def parse_xml_string(text: Union[str, bytes], source: str = '<string>') -> ET.Element:
    """
    Parse XML text into a normalized element tree

    Args:
        text: XML document; bytes are decoded per their encoding declaration
        source: Name used in error messages

    Returns:
        Root element with normalized tags
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MalformedXmlError(source, e) from e
    return normalize_tags(root)


def read_xml(path: Union[str, Path]) -> ET.Element:
    """Read and parse an XML file from disk"""
    path = Path(path)
    return parse_xml_string(path.read_bytes(), source=str(path))


def child_elements(elem: ET.Element, tag: str) -> List[ET.Element]:
    """Direct children with the given tag, in document order"""
    return elem.findall(tag.lower())


def get_attr(elem: ET.Element, *names: str, default: Optional[str] = None) -> Optional[str]:
    """First non-empty attribute among names"""
    for name in names:
        value = elem.get(name)
        if value:
            return value
    return default


def element_text(elem: ET.Element, skip: tuple = ()) -> str:
    """
    All text inside an element with whitespace collapsed

    Text belonging to descendants tagged with any of ``skip`` is dropped,
    their tails are kept.
    """
    parts = []

    def walk(node: ET.Element):
        if node.text:
            parts.append(node.text)
        for child in node:
            if child.tag not in skip:
                walk(child)
            if child.tail:
                parts.append(child.tail)

    walk(elem)
    return ' '.join(''.join(parts).split())
