"""Open edX OLX course export to LiaScript Markdown converter"""

from .config import ConverterConfig
from .converter import CourseConverter, convert_course_archive
from .generators.markdown_generator import MarkdownGenerator, transform_course_to_markdown
from .parsers.course_parser import CourseParser, build_course_tree
from .registry import ComponentRegistry, default_registry

__version__ = "1.0.0"
