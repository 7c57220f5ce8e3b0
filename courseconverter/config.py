"""Converter configuration, passed explicitly to every pipeline stage"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConverterConfig:
    """Options shared by the parser, generator and asset manager"""
    verbose: bool = False
    author: str = "Course Converter"
    email: str = "converter@example.com"
    markdown_filename: str = "course.md"
    media_dirname: str = "media"
