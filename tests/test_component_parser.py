"""Tests for component classification and parsing"""

import pytest

from courseconverter.errors import MalformedComponentError, MissingComponentFileError
from courseconverter.models.intermediate_rep import AboutIR, ComponentRef, HtmlIR, ProblemIR, VideoIR
from courseconverter.parsers.component_parser import (
    build_about_ir, build_problem_ir, build_video_ir, determine_problem_type,
    determine_video_type, parse_about_component, parse_html_component,
    parse_problem_component, parse_video_component
)
from courseconverter.parsers.xml_reader import parse_xml_string


def problem(body: str):
    return parse_xml_string(f"<problem>{body}</problem>")


class TestDetermineProblemType:

    @pytest.mark.parametrize("body, expected", [
        ("<multiplechoiceresponse/>", "multiple_choice"),
        ("<choiceresponse><checkboxgroup/></choiceresponse>", "multiple_choice"),
        ("<choiceresponse><choicegroup/></choiceresponse>", "choice"),
        ("<choiceresponse/>", "choice"),
        ("<optionresponse/>", "selection"),
        ("<stringresponse/>", "text_input"),
        ("<numericalresponse/>", "number_input"),
        ("<formularesponse/>", "formula"),
        ("<coderesponse/>", "code"),
        ("<p>Just text</p>", "unknown"),
    ])
    def test_detection(self, body, expected):
        assert determine_problem_type(problem(body)) == expected

    def test_first_match_wins(self):
        both = problem("<stringresponse/><multiplechoiceresponse/>")
        assert determine_problem_type(both) == "multiple_choice"

    def test_nested_response_detected(self):
        wrapped = problem("<div><optionresponse/></div>")
        assert determine_problem_type(wrapped) == "selection"

    def test_upper_case_tags(self):
        root = parse_xml_string("<PROBLEM><StringResponse answer='x'/></PROBLEM>")
        assert determine_problem_type(root) == "text_input"


class TestDetermineVideoType:

    def test_youtube(self):
        assert determine_video_type(parse_xml_string('<video youtube="1.00:abc" url_name="x"/>')) == "youtube"

    def test_external(self):
        assert determine_video_type(parse_xml_string('<video url_name="https://example.com/v.mp4"/>')) == "external"

    def test_unknown(self):
        assert determine_video_type(parse_xml_string('<video display_name="Nothing"/>')) == "unknown"


class TestBuildIR:

    def test_problem_display_name_fallbacks(self):
        ref = ComponentRef("problem", "p1", display_name="From Vertical")
        assert build_problem_ir(parse_xml_string('<problem display_name="Own"/>'), ref).display_name == "Own"
        assert build_problem_ir(parse_xml_string('<problem/>'), ref).display_name == "From Vertical"
        assert build_problem_ir(parse_xml_string('<problem/>'), ComponentRef("problem", "p1")).display_name == "p1"

    def test_problem_wrong_root(self):
        with pytest.raises(MalformedComponentError, match="p1"):
            build_problem_ir(parse_xml_string("<html/>"), ComponentRef("problem", "p1"))

    def test_video_wrong_root(self):
        with pytest.raises(MalformedComponentError):
            build_video_ir(parse_xml_string("<problem/>"), ComponentRef("video", "v1"))

    def test_about_default_title(self):
        assert build_about_ir("<p>x</p>").display_name == "About This Course"
        assert build_about_ir("<p>x</p>", "Overview").display_name == "Overview"


class TestParseFromDisk:

    def test_html(self, course_dir):
        ir = parse_html_component(course_dir, ComponentRef("html", "h1"))
        assert isinstance(ir, HtmlIR)
        assert ir.display_name == "Introduction"
        assert "<strong>world</strong>" in ir.raw_html

    def test_html_missing_body(self, course_dir):
        (course_dir / "html" / "h1.html").unlink()
        with pytest.raises(MissingComponentFileError, match="content not found"):
            parse_html_component(course_dir, ComponentRef("html", "h1"))

    def test_html_missing_metadata(self, course_dir):
        with pytest.raises(MissingComponentFileError, match="XML not found"):
            parse_html_component(course_dir, ComponentRef("html", "nothing"))

    def test_problem(self, course_dir):
        ir = parse_problem_component(course_dir, ComponentRef("problem", "p1"))
        assert isinstance(ir, ProblemIR)
        assert ir.problem_type == "multiple_choice"
        assert ir.display_name == "Capital Cities"

    def test_problem_missing(self, course_dir):
        with pytest.raises(MissingComponentFileError):
            parse_problem_component(course_dir, ComponentRef("problem", "nope"))

    def test_problem_malformed(self, course_dir, write_file):
        write_file(course_dir, "problem/bad.xml", "<problem><unclosed>")
        with pytest.raises(MalformedComponentError):
            parse_problem_component(course_dir, ComponentRef("problem", "bad"))

    def test_video(self, course_dir):
        ir = parse_video_component(course_dir, ComponentRef("video", "vid1"))
        assert isinstance(ir, VideoIR)
        assert ir.video_type == "youtube"
        assert ir.display_name == "Lecture"

    def test_video_missing(self, course_dir):
        with pytest.raises(MissingComponentFileError):
            parse_video_component(course_dir, ComponentRef("video", "none"))


class TestAbout:

    def test_no_about_directory(self, course_dir):
        with pytest.raises(MissingComponentFileError, match="About directory"):
            parse_about_component(course_dir, ComponentRef("about", "x"))

    def test_no_html_files(self, course_dir, write_file):
        write_file(course_dir, "about/short_description.txt", "text")
        with pytest.raises(MissingComponentFileError, match="No HTML files"):
            parse_about_component(course_dir, ComponentRef("about", "x"))

    def test_overview_preferred(self, course_dir, write_file):
        write_file(course_dir, "about/effort.html", "<p>5 hours</p>")
        write_file(course_dir, "about/overview.html", "<p>Overview body</p>")

        ir = parse_about_component(course_dir, ComponentRef("about", "x"))

        assert isinstance(ir, AboutIR)
        assert ir.raw_html == "<p>Overview body</p>"
        assert ir.display_name == "About This Course"

    def test_first_by_name_without_overview(self, course_dir, write_file):
        write_file(course_dir, "about/short.html", "<p>short</p>")
        write_file(course_dir, "about/effort.html", "<p>effort</p>")

        ir = parse_about_component(course_dir, ComponentRef("about", "x", display_name="Course Info"))

        assert ir.raw_html == "<p>effort</p>"
        assert ir.display_name == "Course Info"


def test_problem_with_declared_encoding(course_dir, write_file):
    write_file(
        course_dir, "problem/latin.xml",
        '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
        '<problem display_name="Déjà vu"><stringresponse answer="oui"/></problem>'.encode("latin-1")
    )
    ir = parse_problem_component(course_dir, ComponentRef("problem", "latin"))
    assert ir.display_name == "Déjà vu"
    assert ir.problem_type == "text_input"
