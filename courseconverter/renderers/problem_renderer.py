"""
Problem Renderer

Renders OLX CAPA problems as LiaScript quizzes:

    - [[X]] / - [[ ]]      multiple choice (checkboxes)
    - [(X)] / - [( )]      single choice
    [[ a | ( b ) | c ]]    dropdown selection
        [[answer | alt]]   text input
    - [[?]] hint           hint line
"""

import re
from typing import Callable, Dict, List, Tuple
import xml.etree.ElementTree as ET

from ..models.intermediate_rep import (
    ProblemIR, MULTIPLE_CHOICE, CHOICE, SELECTION, TEXT_INPUT, NUMBER_INPUT
)
from ..parsers.xml_reader import child_elements, element_text

HINT_TAGS = ('hint', 'demotedhint', 'description')
FEEDBACK_TAGS = ('choicehint', 'optionhint')


def _is_correct(elem: ET.Element) -> bool:
    return str(elem.get('correct', '')).strip().lower() == 'true'


def extract_hints(elem: ET.Element) -> List[str]:
    """
    Extract hint texts from a response element (or problem root)

    Collects direct hint, demotedhint and description children, in that order.
    """
    hints = []
    for tag in HINT_TAGS:
        for hint in child_elements(elem, tag):
            text = element_text(hint)
            if text:
                hints.append(text)
    return hints


def _hint_lines(hints: List[str]) -> List[str]:
    return [f"- [[?]] {hint}" for hint in hints]


def _first_response(problem: ET.Element):
    for elem in problem.iter():
        if elem is not problem and elem.tag.endswith('response'):
            return elem
    return None


def _prompt_lines(response: ET.Element, problem: ET.Element) -> List[str]:
    """
    Question text: the response's p then label

    A response with neither falls back to the problem's own p, but only the
    first response does, so a shared intro is emitted once.
    """
    texts = [element_text(e) for e in child_elements(response, 'p')]
    texts += [element_text(e) for e in child_elements(response, 'label')]
    texts = [t for t in texts if t]

    if not texts and response is _first_response(problem):
        texts = [t for t in (element_text(e) for e in child_elements(problem, 'p')) if t]

    return [f"{text}\n" for text in texts]


def _choice_lines(group: ET.Element, correct_marker: str, wrong_marker: str) -> List[str]:
    lines = []
    for choice in child_elements(group, 'choice'):
        marker = correct_marker if _is_correct(choice) else wrong_marker
        lines.append(f"- {marker} {element_text(choice, skip=FEEDBACK_TAGS)}")
    return lines


# ----------------------------------- Choice types ------------------------------------

def render_multiple_choice(problem: ET.Element) -> str:
    """
    Render multiple choice problem

    Both <multiplechoiceresponse><choicegroup> and
    <choiceresponse><checkboxgroup> are rendered, in that order.
    """
    lines = []

    for response in problem.iter('multiplechoiceresponse'):
        lines.extend(_prompt_lines(response, problem))
        for group in child_elements(response, 'choicegroup'):
            lines.extend(_choice_lines(group, '[[X]]', '[[ ]]'))
        lines.extend(_hint_lines(extract_hints(response)))

    for response in problem.iter('choiceresponse'):
        groups = child_elements(response, 'checkboxgroup')
        if not groups:
            continue
        lines.extend(_prompt_lines(response, problem))
        for group in groups:
            lines.extend(_choice_lines(group, '[[X]]', '[[ ]]'))
        lines.extend(_hint_lines(extract_hints(response)))

    return '\n'.join(lines)


def render_choice(problem: ET.Element) -> str:
    """Render single choice problem"""
    lines = []
    for response in problem.iter('choiceresponse'):
        lines.extend(_prompt_lines(response, problem))
        for group in child_elements(response, 'choicegroup'):
            lines.extend(_choice_lines(group, '[(X)]', '[( )]'))
        lines.extend(_hint_lines(extract_hints(response)))
    return '\n'.join(lines)


def _legacy_options(optioninput: ET.Element) -> List[Tuple[str, bool]]:
    """Options from options="('a','b')" correct="b" attributes"""
    raw = optioninput.get('options', '')
    names = [a or b for a, b in re.findall(r"'([^']*)'|\"([^\"]*)\"", raw)]
    correct = optioninput.get('correct', '')
    return [(name, name == correct) for name in names]


def _options(response: ET.Element) -> List[Tuple[str, bool]]:
    options = []
    for optioninput in child_elements(response, 'optioninput'):
        children = child_elements(optioninput, 'option')
        if children:
            options.extend(
                (element_text(opt, skip=FEEDBACK_TAGS), _is_correct(opt)) for opt in children
            )
        else:
            options.extend(_legacy_options(optioninput))
    return options


def render_selection(problem: ET.Element) -> str:
    """Render dropdown (optionresponse) problem"""
    lines = []
    for response in problem.iter('optionresponse'):
        lines.extend(_prompt_lines(response, problem))

        options = _options(response)
        if options:
            rendered = ' | '.join(
                f"( {text} )" if correct else text for text, correct in options
            )
            lines.append(f"[[ {rendered} ]]")

        lines.extend(_hint_lines(extract_hints(response)))
    return '\n'.join(lines)


# ----------------------------------- Input types ------------------------------------

def _string_answers(response: ET.Element) -> List[str]:
    answers = [response.get('answer', '').strip()]
    for additional in child_elements(response, 'additional_answer'):
        answer = additional.get('answer')
        if answer is None:
            answer = element_text(additional)
        answers.append(answer.strip())
    return [a for a in answers if a]


def render_text_input(problem: ET.Element) -> str:
    """Render text input (stringresponse) problem"""
    lines = []
    for response in problem.iter('stringresponse'):
        lines.extend(_prompt_lines(response, problem))

        answers = _string_answers(response)
        if answers:
            lines.append(f"\n    [[{' | '.join(answers)}]]\n")
        else:
            lines.append("\n    [[ ]]\n")

        lines.extend(_hint_lines(extract_hints(response)))
    return '\n'.join(lines)


def render_number_input(problem: ET.Element) -> str:
    """Render numerical input problem (the accepted answer is not encoded)"""
    lines = []
    for response in problem.iter('numericalresponse'):
        lines.extend(_prompt_lines(response, problem))
        lines.append("    [[Enter a number]]\n")
        lines.extend(_hint_lines(extract_hints(response)))
    return '\n'.join(lines)


def render_unsupported_problem(problem: ET.Element, display_name: str, problem_type: str) -> str:
    """Prompt plus a visible marker for problem types LiaScript can't express"""
    lines = [f"{text}\n" for text in (element_text(p) for p in child_elements(problem, 'p')) if text]
    if display_name:
        lines.append(f"{display_name}\n")
    lines.append(
        "*Only multiple choice, single choice, dropdown, text input and number input "
        f"problems are supported; problem type '{problem_type}' is not supported.*\n"
    )
    lines.extend(_hint_lines(extract_hints(problem)))
    return '\n'.join(lines)


PROBLEM_RENDERERS: Dict[str, Callable[[ET.Element], str]] = {
    MULTIPLE_CHOICE: render_multiple_choice,
    CHOICE: render_choice,
    SELECTION: render_selection,
    TEXT_INPUT: render_text_input,
    NUMBER_INPUT: render_number_input,
}


def demand_hints(problem: ET.Element) -> List[str]:
    """Problem-level <demandhint><hint> texts"""
    hints = []
    for demandhint in child_elements(problem, 'demandhint'):
        for hint in child_elements(demandhint, 'hint'):
            text = element_text(hint)
            if text:
                hints.append(text)
    return hints


def render_problem(problem_ir: ProblemIR) -> str:
    """
    Render problem component to LiaScript Markdown

    Args:
        problem_ir: Parsed problem

    Returns:
        LiaScript Markdown content
    """
    renderer = PROBLEM_RENDERERS.get(problem_ir.problem_type)
    if renderer is None:
        markdown = render_unsupported_problem(
            problem_ir.raw_xml, problem_ir.display_name, problem_ir.problem_type
        )
    else:
        markdown = renderer(problem_ir.raw_xml)

    extra = _hint_lines(demand_hints(problem_ir.raw_xml))
    if extra:
        markdown = '\n'.join([markdown] + extra)
    return markdown
