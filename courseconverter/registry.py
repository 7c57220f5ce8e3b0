"""
Component Registry

Maps a component kind to its (parse, render) pair. Supporting a new kind means
registering a pair; the collector, dispatcher and generator need no changes.
"""

from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from .config import ConverterConfig
from .models.intermediate_rep import ComponentIR, ComponentRef, UnknownIR
from .parsers import component_parser
from .renderers import content_renderer, problem_renderer

ParseFunc = Callable[[Path, ComponentRef], ComponentIR]
RenderFunc = Callable[[ComponentIR], str]


@dataclass(frozen=True)
class ComponentHandler:
    parse: ParseFunc
    render: RenderFunc


class ComponentRegistry:
    """Kind → handler lookup; kinds are case-insensitive and kept in registration order"""

    def __init__(self):
        self._handlers: Dict[str, ComponentHandler] = {}

    def register(self, kind: str, parse: ParseFunc, render: RenderFunc):
        self._handlers[kind.lower()] = ComponentHandler(parse=parse, render=render)

    def get(self, kind: str) -> Optional[ComponentHandler]:
        return self._handlers.get(kind.lower())

    def kinds(self) -> Tuple[str, ...]:
        return tuple(self._handlers)

    def parse(self, course_root: Path, ref: ComponentRef) -> ComponentIR:
        """
        Parse a component into its IR

        Unregistered kinds give an UnknownIR instead of raising. Registered
        kinds raise ComponentError when their files are missing or invalid.
        """
        handler = self.get(ref.kind)
        if handler is None:
            return UnknownIR(kind=ref.kind, id=ref.id)
        return handler.parse(course_root, ref)

    def render(self, component_ir: ComponentIR) -> str:
        if isinstance(component_ir, UnknownIR):
            return content_renderer.render_unknown(component_ir)

        handler = self.get(component_ir.kind)
        if handler is None:
            return content_renderer.render_unknown(UnknownIR(kind=component_ir.kind, id='unknown'))
        return handler.render(component_ir)


def default_registry(config: Optional[ConverterConfig] = None) -> ComponentRegistry:
    """
    Registry with the html, problem, video and about handlers, in scan order

    HTML and about pages link media under config.media_dirname, where the
    AssetManager copies it.
    """
    media_dirname = (config or ConverterConfig()).media_dirname

    registry = ComponentRegistry()
    registry.register(
        'html',
        component_parser.parse_html_component,
        partial(content_renderer.render_html, media_dirname=media_dirname)
    )
    registry.register('problem', component_parser.parse_problem_component, problem_renderer.render_problem)
    registry.register('video', component_parser.parse_video_component, content_renderer.render_video)
    registry.register(
        'about',
        component_parser.parse_about_component,
        partial(content_renderer.render_about, media_dirname=media_dirname)
    )
    return registry
