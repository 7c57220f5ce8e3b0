"""
LiaScript Markdown Generator

Walks the course tree in document order and assembles one Markdown document.
Each component is parsed and rendered as it is reached.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..config import ConverterConfig
from ..errors import ComponentError
from ..models.intermediate_rep import ChapterNode, CourseTree, SequentialNode, VerticalNode
from ..registry import ComponentRegistry, default_registry

COMPLETION_MARKER = '*Course conversion completed*'


class MarkdownGenerator:
    """Generate LiaScript Markdown from a course tree"""

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        registry: Optional[ComponentRegistry] = None
    ):
        self.config = config or ConverterConfig()
        self.registry = registry or default_registry(self.config)
        self.failed_components: List[Dict] = []
        self.component_count = 0

    def generate(self, tree: CourseTree, course_root: Optional[Union[str, Path]] = None) -> str:
        """
        Generate the complete document

        Args:
            tree: Course tree from CourseParser
            course_root: Directory holding component files (defaults to tree.root)

        Returns:
            LiaScript Markdown string
        """
        course_root = Path(course_root) if course_root is not None else tree.root
        if course_root is None:
            raise ValueError("Course root directory is required")

        lines = [
            '---',
            f'author: {self.config.author}',
            f'email: {self.config.email}',
            '---',
            '',
            f'# {tree.title}\n',
        ]

        for chapter in tree.chapters:
            lines.append(self._render_chapter(chapter, course_root))

        lines.append('\n---\n')
        lines.append(f'{COMPLETION_MARKER}\n')

        return '\n'.join(lines)

    def _render_chapter(self, chapter: ChapterNode, course_root: Path) -> str:
        lines = [f'## {chapter.title}\n']
        for sequential in chapter.sequentials:
            lines.append(self._render_sequential(sequential, course_root))
        lines.append('\n---\n')
        return '\n'.join(lines)

    def _render_sequential(self, sequential: SequentialNode, course_root: Path) -> str:
        lines = [f'### {sequential.title}\n']
        # Verticals add no heading; their components follow the sequential's
        for vertical in sequential.verticals:
            lines.extend(self._render_vertical(vertical, course_root))
        return '\n'.join(lines)

    def _render_vertical(self, vertical: VerticalNode, course_root: Path) -> List[str]:
        lines = []
        for index, ref in enumerate(vertical.components, 1):
            self.component_count += 1
            try:
                component_ir = self.registry.parse(course_root, ref)
                lines.append(self.registry.render(component_ir))
            except (ComponentError, OSError, UnicodeDecodeError) as e:
                if self.config.verbose:
                    print(f"   ⚠️  Failed to process component {ref.kind} ({ref.id}): {e}")

                self.failed_components.append({'kind': ref.kind, 'id': ref.id, 'error': str(e)})
                lines.append(f'#### Learning Content {index}\n')
                lines.append(f'*Content temporarily unavailable: {e}*\n\n---\n')
        return lines


def transform_course_to_markdown(
    tree: CourseTree,
    course_root: Optional[Union[str, Path]] = None,
    config: Optional[ConverterConfig] = None,
    registry: Optional[ComponentRegistry] = None
) -> str:
    """Convenience function: one generator per call, nothing shared between courses"""
    return MarkdownGenerator(config, registry).generate(tree, course_root)
