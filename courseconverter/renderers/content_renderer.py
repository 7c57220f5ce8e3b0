"""
Content Renderers

HTML, about, video and placeholder rendering for LiaScript Markdown.
"""

import re

from bs4 import BeautifulSoup
from markdownify import ATX, markdownify

from ..converters.asset_manager import rewrite_media_paths
from ..models.intermediate_rep import AboutIR, HtmlIR, UnknownIR, VideoIR, YOUTUBE, EXTERNAL

NO_CONTENT = '*No content available*'
YOUTUBE_WATCH_URL = 'https://www.youtube.com/watch?v='


def _body_content(html: str) -> str:
    """Drop script/style and reduce a full document to its body"""
    soup = BeautifulSoup(html, 'html.parser')

    for tag in soup(['script', 'style']):
        tag.decompose()

    body = soup.find('body')
    if body:
        return ''.join(str(child) for child in body.children)
    return str(soup)


def html_to_markdown(html: str, media_dirname: str = 'media') -> str:
    """
    Convert an HTML fragment to Markdown

    /static/ media references are rewritten to ./<media_dirname>/ before conversion.
    Returns an empty string when nothing is left.
    """
    if not html or not html.strip():
        return ''

    content = _body_content(rewrite_media_paths(html, media_dirname))
    markdown = markdownify(
        content,
        heading_style=ATX,
        bullets='-',
        strong_em_symbol='*',
    )

    # Clean up extra blank lines
    markdown = re.sub(r'\n(?:[ \t]*\n){2,}', '\n\n', markdown)
    return markdown.strip()


def render_html(html_ir: HtmlIR, media_dirname: str = 'media') -> str:
    """Render HTML component"""
    return html_to_markdown(html_ir.raw_html, media_dirname) or NO_CONTENT


def render_about(about_ir: AboutIR, media_dirname: str = 'media') -> str:
    """Render about page under its own heading"""
    lines = [f"## {about_ir.display_name}\n"]
    lines.append(html_to_markdown(about_ir.raw_html, media_dirname) or NO_CONTENT)
    lines.append('\n---\n')
    return '\n'.join(lines)


# ----------------------------------- Video ------------------------------------

def youtube_id(youtube_attr: str):
    """
    Video id from a youtube attribute such as "1.00:dQw4w9WgXcQ"

    Only the first speed entry of a comma-separated list is used.
    Returns None when the entry has no id field.
    """
    first_entry = (youtube_attr or '').split(',')[0].strip()
    parts = first_entry.split(':')
    if len(parts) < 2 or not parts[1].strip():
        return None
    return parts[1].strip()


def _embedded_video(display_name: str, url: str) -> str:
    lines = [
        f"**{display_name}**\n",
        "Watch the video below:\n",
        f"\n!?[{display_name}]({url})\n",
    ]
    return '\n'.join(lines)


def render_video(video_ir: VideoIR) -> str:
    """Render video component as a LiaScript video embed"""
    name = video_ir.display_name
    video = video_ir.raw_xml

    if video_ir.video_type == YOUTUBE:
        video_id = youtube_id(video.get('youtube'))
        if video_id is None:
            return f"**{name}**\n\n*Video ID could not be extracted*\n"
        return _embedded_video(name, f"{YOUTUBE_WATCH_URL}{video_id}")

    if video_ir.video_type == EXTERNAL:
        return _embedded_video(name, video.get('url_name'))

    return f"**{name}**\n\n*Only YouTube and external URL videos are supported; this video type is not supported.*\n"


# ----------------------------------- Unknown ------------------------------------

def render_unknown(unknown_ir: UnknownIR) -> str:
    """Placeholder for component kinds with no registered handler"""
    return (
        f"## Unsupported Component: {unknown_ir.id}\n\n"
        f"*Unsupported component type: {unknown_ir.kind} ({unknown_ir.id})*\n\n---\n"
    )
