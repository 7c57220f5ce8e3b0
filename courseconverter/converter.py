"""
Main OLX to LiaScript Converter

Orchestrates the conversion pipeline for one course directory, one archive,
or a batch of archives.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import ConverterConfig
from .converters.asset_manager import AssetManager
from .generators.markdown_generator import MarkdownGenerator
from .models.intermediate_rep import CourseTree
from .parsers.course_parser import CourseParser, resolve_course_root
from .registry import ComponentRegistry, default_registry
from .utils.archive import archive_stem, extract_course, find_course_archives


class CourseConverter:
    """Main converter class orchestrating the pipeline"""

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        registry: Optional[ComponentRegistry] = None
    ):
        self.config = config or ConverterConfig()
        self.registry = registry or default_registry(self.config)

    def convert_directory(self, course_root: Union[str, Path], output_dir: Union[str, Path]) -> Dict:
        """
        Convert an already-extracted course directory

        Args:
            course_root: Directory containing course.xml
            output_dir: Directory receiving course.md and media/

        Returns:
            Conversion report dictionary
        """
        verbose = self.config.verbose
        course_root = resolve_course_root(course_root)

        # Step 1: Parse course structure
        if verbose:
            print("\nStep 1: Parsing course structure...")

        tree = CourseParser(self.config, self.registry.kinds()).parse(course_root)

        # Step 2: Parse and render components
        if verbose:
            print("\nStep 2: Converting to LiaScript Markdown...")

        generator = MarkdownGenerator(self.config, self.registry)
        markdown = generator.generate(tree, course_root)

        # Step 3: Write output
        if verbose:
            print("\nStep 3: Writing course.md and media...")

        asset_manager = AssetManager(course_root, Path(output_dir), self.config)
        markdown_path = asset_manager.write_markdown(markdown)
        media_count = asset_manager.copy_all_assets()

        return self._generate_report(tree, generator, markdown_path, media_count)

    def convert(self, archive_path: Union[str, Path], output_dir: Union[str, Path]) -> Dict:
        """
        Convert one .tar.gz course export into <output_dir>/<course name>/

        Raises on structural failures; component failures only appear in the report.
        """
        archive_path = Path(archive_path)
        course_output = Path(output_dir) / archive_stem(archive_path)

        if self.config.verbose:
            print("=" * 60)
            print(f"Converting {archive_path.name}")
            print("=" * 60)

        temp_dir = Path(tempfile.mkdtemp(prefix="courseconverter_"))
        try:
            extracted = extract_course(archive_path, temp_dir / "extracted", verbose=self.config.verbose)
            report = self.convert_directory(extracted, course_output)
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

        report['source_file'] = archive_path.name
        return report

    def convert_batch(self, input_path: Union[str, Path], output_dir: Union[str, Path]) -> List[Dict]:
        """
        Convert every archive found at input_path

        A failing course is recorded and the batch continues with the next one.
        """
        archives = find_course_archives(input_path)
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        if self.config.verbose:
            print(f"Found {len(archives)} course(s) to process")

        results = []
        for i, archive in enumerate(archives, 1):
            if self.config.verbose:
                print(f"\nProcessing course {i}/{len(archives)}: {archive.name}")

            try:
                report = self.convert(archive, output_dir)
                report['success'] = True
                report['error'] = None
            except Exception as e:
                if self.config.verbose:
                    print(f"   ❌ Failed to process {archive.name}: {e}")
                report = {
                    'source_file': archive.name,
                    'success': False,
                    'error': str(e),
                    'output_directory': None,
                    'statistics': {'media': 0},
                }
            results.append(report)

        if self.config.verbose:
            succeeded = sum(1 for r in results if r['success'])
            print(f"\nConversion completed: {succeeded} successful, {len(results) - succeeded} failed")

        return results

    def _generate_report(
        self,
        tree: CourseTree,
        generator: MarkdownGenerator,
        markdown_path: Path,
        media_count: int = 0
    ) -> Dict:
        """Generate conversion report"""

        sequentials = [seq for chapter in tree.chapters for seq in chapter.sequentials]
        verticals = [vert for seq in sequentials for vert in seq.verticals]

        # Count failed components by kind
        failed_by_kind = {}
        for item in generator.failed_components:
            failed_by_kind[item['kind']] = failed_by_kind.get(item['kind'], 0) + 1

        return {
            'course_title': tree.title,
            'course_id': tree.id,
            'statistics': {
                'chapters': len(tree.chapters),
                'sequentials': len(sequentials),
                'verticals': len(verticals),
                'components': generator.component_count,
                'failed_components': len(generator.failed_components),
                'media': media_count,
            },
            'failed': failed_by_kind,
            'markdown_file': str(markdown_path),
            'output_directory': str(markdown_path.parent),
        }


def convert_course_archive(
    archive_path: str,
    output_dir: str,
    verbose: bool = True
) -> Dict:
    """
    Convenience function to convert one course archive

    Args:
        archive_path: Path to .tar.gz course export
        output_dir: Output directory; the course lands in a subdirectory
        verbose: Print progress messages

    Returns:
        Conversion report dictionary
    """
    converter = CourseConverter(ConverterConfig(verbose=verbose))
    return converter.convert(archive_path, output_dir)
