"""
Asset Manager

Copies OLX static assets into the course's media directory and rewrites
/static/ references in HTML to match the copied names.
"""

import re
import shutil
import urllib.parse
from pathlib import Path
from typing import Optional, Set

from ..config import ConverterConfig
from ..utils.file_names import sanitize_file_name

_STATIC_REF = re.compile(r'''(src|href)=["']/static/([^"']+)["']''')


def media_name(static_path: str) -> str:
    """Media file name for a path relative to the static directory"""
    path = urllib.parse.unquote(static_path)
    path = re.split(r'[?#]', path, maxsplit=1)[0]
    return sanitize_file_name(path)


def rewrite_media_paths(html: str, media_dirname: str = 'media') -> str:
    """
    Point /static/ src and href attributes at ./<media_dirname>/

    Example: src="/static/images/a b.png" -> src="./media/images_a_b.png"
    """
    if not html:
        return html

    def replace(match):
        attr, path = match.group(1), match.group(2)
        return f'{attr}="./{media_dirname}/{media_name(path)}"'

    return _STATIC_REF.sub(replace, html)


class AssetManager:
    """Write one course's Markdown and media files"""

    def __init__(self, course_root: Path, output_dir: Path, config: Optional[ConverterConfig] = None):
        self.course_root = Path(course_root)
        self.output_dir = Path(output_dir)
        self.config = config or ConverterConfig()
        self.media_dir = self.output_dir / self.config.media_dirname
        self.copied_files: Set[str] = set()

    def write_markdown(self, markdown: str) -> Path:
        """Write course.md, creating the course output directory"""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        markdown_path = self.output_dir / self.config.markdown_filename
        markdown_path.write_text(markdown, encoding='utf-8')

        if self.config.verbose:
            print(f"   📝 Wrote {markdown_path}")

        return markdown_path

    def copy_all_assets(self) -> int:
        """Copy every file under static/ into the media directory"""
        self.media_dir.mkdir(parents=True, exist_ok=True)
        static_dir = self.course_root / 'static'

        if not static_dir.exists():
            if self.config.verbose:
                print("     No static directory found")
            return 0

        count = 0
        for file_path in sorted(static_dir.rglob('*')):
            if not file_path.is_file():
                continue

            rel_path = file_path.relative_to(static_dir).as_posix()
            target_name = media_name(rel_path)

            try:
                shutil.copy2(file_path, self.media_dir / target_name)
            except OSError as e:
                if self.config.verbose:
                    print(f"   ⚠️  Failed to copy media file {rel_path}: {e}")
                continue

            self.copied_files.add(target_name)
            count += 1

        if self.config.verbose and count > 0:
            print(f"    Copied {count} media files to {self.media_dir}")

        return count
