"""
Intermediate Representation (IR) Models

The course tree mirrors the OLX reference chain. Component IR values are the
parsed, typed form of one leaf component, ready for rendering.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Optional, Tuple, Union
import xml.etree.ElementTree as ET


@dataclass(frozen=True)
class ComponentRef:
    """Reference to a leaf component inside a vertical"""
    kind: str  # 'html', 'problem', 'video', 'about' or anything else
    id: str  # filename stem of the backing file(s)
    display_name: Optional[str] = None


@dataclass(frozen=True)
class VerticalNode:
    """Transparent container: keeps component order, renders no heading"""
    id: str
    title: str
    components: Tuple[ComponentRef, ...] = ()


@dataclass(frozen=True)
class SequentialNode:
    """Intermediate representation of a sequential (subsection)"""
    id: str
    title: str
    verticals: Tuple[VerticalNode, ...] = ()


@dataclass(frozen=True)
class ChapterNode:
    """Intermediate representation of a chapter (top-level section)"""
    id: str
    title: str
    sequentials: Tuple[SequentialNode, ...] = ()


@dataclass(frozen=True)
class CourseTree:
    """Intermediate representation of an entire course"""
    id: str
    title: str
    chapters: Tuple[ChapterNode, ...] = ()
    root: Optional[Path] = None  # directory the tree was built from


# Problem subtypes
MULTIPLE_CHOICE = 'multiple_choice'
CHOICE = 'choice'
SELECTION = 'selection'
TEXT_INPUT = 'text_input'
NUMBER_INPUT = 'number_input'
FORMULA = 'formula'
CODE = 'code'
UNKNOWN = 'unknown'

# Video subtypes
YOUTUBE = 'youtube'
EXTERNAL = 'external'


@dataclass(frozen=True)
class HtmlIR:
    kind: ClassVar[str] = 'html'
    display_name: str
    raw_html: str


@dataclass(frozen=True)
class ProblemIR:
    kind: ClassVar[str] = 'problem'
    display_name: str
    problem_type: str
    raw_xml: ET.Element = field(compare=False)


@dataclass(frozen=True)
class VideoIR:
    kind: ClassVar[str] = 'video'
    display_name: str
    video_type: str
    raw_xml: ET.Element = field(compare=False)


@dataclass(frozen=True)
class AboutIR:
    kind: ClassVar[str] = 'about'
    display_name: str
    raw_html: str


@dataclass(frozen=True)
class UnknownIR:
    """Placeholder for a component kind nothing is registered for"""
    kind: str
    id: str


ComponentIR = Union[HtmlIR, ProblemIR, VideoIR, AboutIR, UnknownIR]
