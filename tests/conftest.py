"""Shared fixtures: a small OLX course laid out on disk"""

import tarfile
from pathlib import Path

import pytest


MCQ_PROBLEM = """<problem display_name="Capital Cities">
  <multiplechoiceresponse>
    <p>What is the capital of France?</p>
    <label>Choose the correct answer:</label>
    <choicegroup type="MultipleChoice">
      <choice correct="false">London</choice>
      <choice correct="true">Paris</choice>
      <choice correct="false">Madrid</choice>
    </choicegroup>
  </multiplechoiceresponse>
</problem>"""


def _write(root: Path, rel_path: str, content) -> Path:
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def write_file():
    """write_file(root, 'chapter/ch1.xml', '<chapter/>')"""
    return _write


@pytest.fixture
def course_dir(tmp_path):
    """One chapter, one sequential, one vertical with html, problem and video"""
    root = tmp_path / "course"
    _write(root, "course.xml", '<course url_name="2024" org="TestX" course="T101"/>')
    _write(
        root, "course/2024.xml",
        '<course display_name="Test Course" course="T101">'
        '<chapter url_name="ch1"/>'
        '</course>'
    )
    _write(
        root, "chapter/ch1.xml",
        '<chapter display_name="Chapter One"><sequential url_name="seq1"/></chapter>'
    )
    _write(
        root, "sequential/seq1.xml",
        '<sequential display_name="Lesson One"><vertical url_name="v1"/></sequential>'
    )
    _write(
        root, "vertical/v1.xml",
        '<vertical display_name="Hidden Vertical Title">'
        '<problem url_name="p1"/>'
        '<html url_name="h1"/>'
        '<video url_name="vid1"/>'
        '</vertical>'
    )
    _write(root, "html/h1.xml", '<html filename="h1" display_name="Introduction"/>')
    _write(
        root, "html/h1.html",
        '<p>Hello <strong>world</strong></p><img src="/static/images/pic 1.png" alt="Picture"/>'
    )
    _write(root, "problem/p1.xml", MCQ_PROBLEM)
    _write(root, "video/vid1.xml", '<video display_name="Lecture" youtube="1.00:abc123"/>')
    _write(root, "static/images/pic 1.png", b"\x89PNG fake")
    return root


@pytest.fixture
def make_archive(tmp_path):
    """Pack a course directory into <name>.tar.gz under a single top-level folder"""
    def make(course_root: Path, name: str = "course") -> Path:
        archives = tmp_path / "archives"
        archives.mkdir(exist_ok=True)
        archive_path = archives / f"{name}.tar.gz"
        with tarfile.open(archive_path, "w:gz") as tar:
            tar.add(course_root, arcname="course")
        return archive_path
    return make
