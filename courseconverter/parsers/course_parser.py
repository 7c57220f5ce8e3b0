"""
OLX Course Structure Parser

Walks course.xml → chapter → sequential → vertical and builds the course tree.
Missing structural files degrade to placeholder nodes; a missing course.xml
or malformed structural XML aborts the course.
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union
import xml.etree.ElementTree as ET

from ..config import ConverterConfig
from ..errors import CourseNotFoundError
from ..models.intermediate_rep import (
    ChapterNode, ComponentRef, CourseTree, SequentialNode, VerticalNode
)
from .xml_reader import child_elements, get_attr, read_xml

KNOWN_COMPONENT_KINDS = ('html', 'problem', 'video', 'about')

Node = TypeVar('Node')


def collect_component_refs(
    vertical: ET.Element,
    kinds: Sequence[str] = KNOWN_COMPONENT_KINDS
) -> List[ComponentRef]:
    """
    Collect component references from a vertical element

    All components of one kind are grouped together, in the order of ``kinds``.

    Args:
        vertical: Parsed vertical element (tags already lower-cased)
        kinds: Component kinds to scan for, in scan order

    Returns:
        Ordered list of ComponentRef
    """
    components = []
    for kind in kinds:
        for item in child_elements(vertical, kind):
            component_id = get_attr(item, 'url_name', 'url', 'filename', default='unknown')
            components.append(ComponentRef(
                kind=kind,
                id=component_id,
                display_name=item.get('display_name')
            ))
    return components


def _child_refs(node: ET.Element, tag: str) -> List[str]:
    return [c.get('url_name') for c in child_elements(node, tag) if c.get('url_name')]


class CourseParser:
    """Parse an extracted OLX course directory into a CourseTree"""

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        component_kinds: Sequence[str] = KNOWN_COMPONENT_KINDS
    ):
        self.config = config or ConverterConfig()
        self.component_kinds = tuple(component_kinds)

    def parse(self, course_root: Union[str, Path]) -> CourseTree:
        """
        Build the course tree

        Args:
            course_root: Directory containing course.xml

        Returns:
            CourseTree object
        """
        course_root = Path(course_root)
        course_id, title, chapter_refs = self._parse_course_xml(course_root)

        chapters = self._parse_each(
            course_root, 'chapter', chapter_refs, self._build_chapter
        )

        if self.config.verbose:
            print(f"   Parsed: {title} ({len(chapters)} chapters)")

        return CourseTree(id=course_id, title=title, chapters=chapters, root=course_root)

    def _parse_course_xml(self, course_root: Path) -> Tuple[str, str, List[str]]:
        """Read course.xml, preferring course/<url_name>.xml for details"""
        course_xml = course_root / 'course.xml'
        if not course_xml.exists():
            raise CourseNotFoundError(f"course.xml not found at {course_xml}")

        root_node = read_xml(course_xml)
        url_name = root_node.get('url_name')

        node = root_node
        if url_name:
            detailed_path = course_root / 'course' / f'{url_name}.xml'
            if detailed_path.exists():
                node = read_xml(detailed_path)

        title = node.get('display_name') or url_name or 'Untitled Course'
        course_id = (
            node.get('course') or root_node.get('course')
            or url_name or 'unknown'
        )
        return course_id, title, _child_refs(node, 'chapter')

    def _parse_each(
        self,
        course_root: Path,
        level: str,
        refs: Iterable[str],
        build: Callable[[Path, str, ET.Element], Node]
    ) -> Tuple[Node, ...]:
        """Read <level>/<ref>.xml for each ref, substituting placeholders"""
        nodes = []
        for ref in refs:
            path = course_root / level / f'{ref}.xml'
            if not path.exists():
                if self.config.verbose:
                    print(f"   ⚠️  Missing {level} file: {path}")
                nodes.append(self._placeholder(level, ref))
                continue
            nodes.append(build(course_root, ref, read_xml(path)))
        return tuple(nodes)

    @staticmethod
    def _placeholder(level: str, ref: str):
        title = f"Missing {level} {ref}"
        if level == 'chapter':
            return ChapterNode(id=ref, title=title)
        if level == 'sequential':
            return SequentialNode(id=ref, title=title)
        return VerticalNode(id=ref, title=title)

    def _build_chapter(self, course_root: Path, ref: str, node: ET.Element) -> ChapterNode:
        sequentials = self._parse_each(
            course_root, 'sequential', _child_refs(node, 'sequential'), self._build_sequential
        )
        return ChapterNode(id=ref, title=node.get('display_name') or ref, sequentials=sequentials)

    def _build_sequential(self, course_root: Path, ref: str, node: ET.Element) -> SequentialNode:
        verticals = self._parse_each(
            course_root, 'vertical', _child_refs(node, 'vertical'), self._build_vertical
        )
        return SequentialNode(id=ref, title=node.get('display_name') or ref, verticals=verticals)

    def _build_vertical(self, course_root: Path, ref: str, node: ET.Element) -> VerticalNode:
        components = collect_component_refs(node, self.component_kinds)
        return VerticalNode(
            id=ref,
            title=node.get('display_name') or ref,
            components=tuple(components)
        )


def build_course_tree(
    course_root: Union[str, Path],
    config: Optional[ConverterConfig] = None
) -> CourseTree:
    """Convenience wrapper around CourseParser"""
    return CourseParser(config).parse(course_root)


def resolve_course_root(extracted_dir: Union[str, Path]) -> Path:
    """The extracted directory must hold course.xml at its top level"""
    extracted_dir = Path(extracted_dir)
    if not (extracted_dir / 'course.xml').exists():
        raise CourseNotFoundError(f"course.xml not found under {extracted_dir}")
    return extracted_dir
