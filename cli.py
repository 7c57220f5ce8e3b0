#!/usr/bin/env python3
"""
Open edX OLX to LiaScript Converter - Command Line Interface
"""

import sys
import argparse
import traceback
from pathlib import Path

from courseconverter.config import ConverterConfig
from courseconverter.converter import CourseConverter
from courseconverter.errors import ArchiveError


def main():
    parser = argparse.ArgumentParser(
        description='Convert Open edX OLX course exports to LiaScript Markdown',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Convert a single course
  python cli.py course.tar.gz output/

  # Convert every .tar.gz in a directory
  python cli.py exports/ output/

  # Quiet mode
  python cli.py exports/ output/ --quiet
        '''
    )

    parser.add_argument(
        'input',
        help='Path to a .tar.gz course export or a directory containing several'
    )

    parser.add_argument(
        'output_dir',
        help='Output directory; each course gets <name>/course.md and <name>/media/'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output (default)'
    )

    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Suppress output messages'
    )

    parser.add_argument(
        '--author',
        default=ConverterConfig.author,
        help='Author written to the LiaScript header'
    )

    parser.add_argument(
        '--email',
        default=ConverterConfig.email,
        help='Email written to the LiaScript header'
    )

    args = parser.parse_args()

    config = ConverterConfig(
        verbose=not args.quiet,
        author=args.author,
        email=args.email
    )

    try:
        results = CourseConverter(config).convert_batch(args.input, args.output_dir)
    except ArchiveError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ Conversion failed: {e}")
        if not args.quiet:
            traceback.print_exc()
        sys.exit(1)

    if not args.quiet:
        print("\n📊 Conversion Summary:")
        for report in results:
            if not report['success']:
                print(f"   ❌ {report['source_file']}: {report['error']}")
                continue
            stats = report['statistics']
            print(f"   ✅ {report['course_title']} ({report['course_id']})")
            print(f"      Chapters: {stats['chapters']}")
            print(f"      Sequentials: {stats['sequentials']}")
            print(f"      Components: {stats['components']} ({stats['failed_components']} unavailable)")
            print(f"      Media files: {stats['media']}")
            print(f"      📁 Output: {Path(report['output_directory'])}")

    sys.exit(0 if all(r['success'] for r in results) else 1)


if __name__ == '__main__':
    main()
