"""
OLX Component Parser

Loads a component's backing file(s) and builds its typed IR. Subtypes are
detected from the XML structure only.

The ``build_*_ir`` functions work on already-parsed input; the
``parse_*_component`` functions add the filesystem lookups.
"""

from pathlib import Path
from typing import Optional
import xml.etree.ElementTree as ET

from ..errors import MalformedComponentError, MalformedXmlError, MissingComponentFileError
from ..models.intermediate_rep import (
    AboutIR, ComponentRef, HtmlIR, ProblemIR, VideoIR,
    MULTIPLE_CHOICE, CHOICE, SELECTION, TEXT_INPUT, NUMBER_INPUT,
    FORMULA, CODE, UNKNOWN, YOUTUBE, EXTERNAL
)
from .xml_reader import read_xml

DEFAULT_ABOUT_TITLE = 'About This Course'

# (response tag, problem type), checked in order
_RESPONSE_TYPES = (
    ('optionresponse', SELECTION),
    ('stringresponse', TEXT_INPUT),
    ('numericalresponse', NUMBER_INPUT),
    ('formularesponse', FORMULA),
    ('coderesponse', CODE),
)


def determine_problem_type(problem: ET.Element) -> str:
    """
    Determine problem type from the response element present

    Args:
        problem: Parsed <problem> element

    Returns:
        One of the problem type constants
    """
    if problem.find('.//multiplechoiceresponse') is not None:
        return MULTIPLE_CHOICE

    choice_response = problem.find('.//choiceresponse')
    if choice_response is not None:
        # Checkbox (multi-select) reuses the multiple choice encoding
        if choice_response.find('checkboxgroup') is not None:
            return MULTIPLE_CHOICE
        return CHOICE

    for tag, problem_type in _RESPONSE_TYPES:
        if problem.find(f'.//{tag}') is not None:
            return problem_type

    return UNKNOWN


def determine_video_type(video: ET.Element) -> str:
    if video.get('youtube'):
        return YOUTUBE
    if video.get('url_name'):
        return EXTERNAL
    return UNKNOWN


def _read_component_xml(path: Path, component_id: str) -> ET.Element:
    try:
        return read_xml(path)
    except MalformedXmlError as e:
        raise MalformedComponentError(f"Invalid XML for component {component_id}: {e}") from e


# ----------------------------------- HTML ------------------------------------

def build_html_ir(metadata: ET.Element, body: str, ref: ComponentRef) -> HtmlIR:
    return HtmlIR(
        display_name=metadata.get('display_name') or ref.display_name or ref.id,
        raw_html=body
    )


def parse_html_component(course_root: Path, ref: ComponentRef) -> HtmlIR:
    """Read html/<id>.xml (metadata) and html/<id>.html (body)"""
    xml_path = Path(course_root) / 'html' / f'{ref.id}.xml'
    html_path = Path(course_root) / 'html' / f'{ref.id}.html'

    if not xml_path.exists():
        raise MissingComponentFileError(f"HTML component XML not found: {xml_path}")
    if not html_path.exists():
        raise MissingComponentFileError(f"HTML component content not found: {html_path}")

    metadata = _read_component_xml(xml_path, ref.id)
    body = html_path.read_text(encoding='utf-8')
    return build_html_ir(metadata, body, ref)


# ----------------------------------- Problem ------------------------------------

def build_problem_ir(problem: ET.Element, ref: ComponentRef) -> ProblemIR:
    if problem.tag != 'problem':
        raise MalformedComponentError(
            f"Invalid problem XML structure: {ref.id} (root is <{problem.tag}>)"
        )
    return ProblemIR(
        display_name=problem.get('display_name') or ref.display_name or ref.id,
        problem_type=determine_problem_type(problem),
        raw_xml=problem
    )


def parse_problem_component(course_root: Path, ref: ComponentRef) -> ProblemIR:
    path = Path(course_root) / 'problem' / f'{ref.id}.xml'
    if not path.exists():
        raise MissingComponentFileError(f"Problem file not found: {path}")
    return build_problem_ir(_read_component_xml(path, ref.id), ref)


# ----------------------------------- Video ------------------------------------

def build_video_ir(video: ET.Element, ref: ComponentRef) -> VideoIR:
    if video.tag != 'video':
        raise MalformedComponentError(
            f"Invalid video XML structure: {ref.id} (root is <{video.tag}>)"
        )
    return VideoIR(
        display_name=video.get('display_name') or ref.display_name or ref.id,
        video_type=determine_video_type(video),
        raw_xml=video
    )


def parse_video_component(course_root: Path, ref: ComponentRef) -> VideoIR:
    path = Path(course_root) / 'video' / f'{ref.id}.xml'
    if not path.exists():
        raise MissingComponentFileError(f"Video file not found: {path}")
    return build_video_ir(_read_component_xml(path, ref.id), ref)


# ----------------------------------- About ------------------------------------

def build_about_ir(body: str, display_name: Optional[str] = None) -> AboutIR:
    return AboutIR(display_name=display_name or DEFAULT_ABOUT_TITLE, raw_html=body)


def find_about_page(about_dir: Path) -> Optional[Path]:
    """overview.html if present, else the first .html file by name"""
    overview = about_dir / 'overview.html'
    if overview.is_file():
        return overview
    pages = sorted(p for p in about_dir.glob('*.html') if p.is_file())
    return pages[0] if pages else None


def parse_about_component(course_root: Path, ref: ComponentRef) -> AboutIR:
    about_dir = Path(course_root) / 'about'
    if not about_dir.is_dir():
        raise MissingComponentFileError(f"About directory not found: {about_dir}")

    page = find_about_page(about_dir)
    if page is None:
        raise MissingComponentFileError(f"No HTML files found in about directory: {about_dir}")

    return build_about_ir(page.read_text(encoding='utf-8'), ref.display_name)
