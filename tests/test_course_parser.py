"""Tests for CourseParser: OLX structure to course tree"""

import pytest

from courseconverter.config import ConverterConfig
from courseconverter.errors import CourseNotFoundError, MalformedXmlError
from courseconverter.models.intermediate_rep import ComponentRef
from courseconverter.parsers.course_parser import (
    CourseParser, build_course_tree, collect_component_refs, resolve_course_root
)
from courseconverter.parsers.xml_reader import parse_xml_string


class TestBuildCourseTree:

    def test_full_tree(self, course_dir):
        tree = build_course_tree(course_dir)

        assert tree.title == "Test Course"
        assert tree.id == "T101"
        assert tree.root == course_dir
        assert [c.title for c in tree.chapters] == ["Chapter One"]

        sequential = tree.chapters[0].sequentials[0]
        assert sequential.id == "seq1"
        assert sequential.title == "Lesson One"

        vertical = sequential.verticals[0]
        assert vertical.title == "Hidden Vertical Title"
        assert [(c.kind, c.id) for c in vertical.components] == [
            ("html", "h1"), ("problem", "p1"), ("video", "vid1")
        ]

    def test_root_file_used_without_detailed_file(self, tmp_path, write_file):
        write_file(tmp_path, "course.xml", '<course display_name="Flat" url_name="run1"><chapter url_name="c"/></course>')
        write_file(tmp_path, "chapter/c.xml", '<chapter/>')

        tree = build_course_tree(tmp_path)

        assert tree.title == "Flat"
        assert tree.id == "run1"
        # display_name missing: falls back to the ref
        assert tree.chapters[0].title == "c"

    def test_untitled_course(self, tmp_path, write_file):
        write_file(tmp_path, "course.xml", '<course/>')
        tree = build_course_tree(tmp_path)
        assert tree.title == "Untitled Course"
        assert tree.id == "unknown"
        assert tree.chapters == ()

    def test_chapter_order_preserved(self, course_dir, write_file):
        write_file(
            course_dir, "course/2024.xml",
            '<course display_name="Test Course">'
            '<chapter url_name="z"/><chapter url_name="ch1"/><chapter url_name="a"/>'
            '</course>'
        )
        write_file(course_dir, "chapter/z.xml", '<chapter display_name="Zed"/>')
        write_file(course_dir, "chapter/a.xml", '<chapter display_name="Ay"/>')

        tree = build_course_tree(course_dir)
        assert [c.title for c in tree.chapters] == ["Zed", "Chapter One", "Ay"]

    def test_missing_course_xml(self, tmp_path):
        with pytest.raises(CourseNotFoundError):
            build_course_tree(tmp_path)

    def test_malformed_structural_xml_propagates(self, course_dir, write_file):
        write_file(course_dir, "chapter/ch1.xml", "<chapter><broken>")
        with pytest.raises(MalformedXmlError):
            build_course_tree(course_dir)


class TestMissingStructuralFiles:

    def test_missing_chapter_placeholder(self, course_dir, write_file):
        write_file(
            course_dir, "course/2024.xml",
            '<course display_name="Test Course"><chapter url_name="ghost"/><chapter url_name="ch1"/></course>'
        )

        tree = build_course_tree(course_dir)

        ghost, real = tree.chapters
        assert ghost.id == "ghost"
        assert ghost.title == "Missing chapter ghost"
        assert ghost.sequentials == ()
        # Sibling still processed
        assert real.title == "Chapter One"
        assert len(real.sequentials) == 1

    def test_missing_sequential_placeholder(self, course_dir, write_file):
        write_file(
            course_dir, "chapter/ch1.xml",
            '<chapter display_name="Chapter One"><sequential url_name="nope"/><sequential url_name="seq1"/></chapter>'
        )

        sequentials = build_course_tree(course_dir).chapters[0].sequentials

        assert [s.title for s in sequentials] == ["Missing sequential nope", "Lesson One"]
        assert sequentials[0].verticals == ()

    def test_missing_vertical_placeholder(self, course_dir, write_file):
        write_file(
            course_dir, "sequential/seq1.xml",
            '<sequential display_name="Lesson One"><vertical url_name="gone"/></sequential>'
        )

        vertical = build_course_tree(course_dir).chapters[0].sequentials[0].verticals[0]

        assert vertical.title == "Missing vertical gone"
        assert vertical.components == ()

    def test_missing_file_warning_in_verbose_mode(self, course_dir, write_file, capsys):
        write_file(course_dir, "course/2024.xml", '<course><chapter url_name="ghost"/></course>')

        CourseParser(ConverterConfig(verbose=True)).parse(course_dir)

        assert "Missing chapter file" in capsys.readouterr().out

    def test_quiet_by_default(self, course_dir, write_file, capsys):
        write_file(course_dir, "course/2024.xml", '<course><chapter url_name="ghost"/></course>')
        CourseParser().parse(course_dir)
        assert capsys.readouterr().out == ""


class TestCollectComponentRefs:

    def test_grouped_in_fixed_kind_order(self):
        vertical = parse_xml_string(
            '<vertical>'
            '<video url_name="v"/>'
            '<html url_name="h"/>'
            '<problem url="p"/>'
            '<HTML filename="h2"/>'
            '<about/>'
            '</vertical>'
        )

        refs = collect_component_refs(vertical)

        assert refs == [
            ComponentRef("html", "h"),
            ComponentRef("html", "h2"),
            ComponentRef("problem", "p"),
            ComponentRef("video", "v"),
            ComponentRef("about", "unknown"),
        ]

    def test_url_name_wins(self):
        vertical = parse_xml_string('<vertical><html url_name="a" url="b" filename="c"/></vertical>')
        assert collect_component_refs(vertical)[0].id == "a"

    def test_display_name_carried(self):
        vertical = parse_xml_string('<vertical><about url_name="a" display_name="Overview"/></vertical>')
        assert collect_component_refs(vertical)[0].display_name == "Overview"

    def test_custom_kinds(self):
        vertical = parse_xml_string('<vertical><poll url_name="x"/><html url_name="h"/></vertical>')
        refs = collect_component_refs(vertical, kinds=("poll", "html"))
        assert [(r.kind, r.id) for r in refs] == [("poll", "x"), ("html", "h")]


def test_resolve_course_root(course_dir, tmp_path):
    assert resolve_course_root(course_dir) == course_dir
    with pytest.raises(CourseNotFoundError):
        resolve_course_root(tmp_path / "empty")
