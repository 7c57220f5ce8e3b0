"""Command-line entry point for the OLX to LiaScript converter"""

import sys
import argparse

from .config import ConverterConfig
from .converter import CourseConverter


def main():
    parser = argparse.ArgumentParser(
        description='Convert Open edX OLX course exports to LiaScript Markdown'
    )
    parser.add_argument('input', help='A .tar.gz course export or a directory of them')
    parser.add_argument('output_dir', help='Output directory for converted courses')
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print verbose output'
    )

    args = parser.parse_args()

    converter = CourseConverter(ConverterConfig(verbose=args.verbose))
    results = converter.convert_batch(args.input, args.output_dir)

    for report in results:
        if report['success']:
            print(f"{report['source_file']}: {report['course_title']} -> {report['output_directory']}")
        else:
            print(f"{report['source_file']}: failed ({report['error']})")

    return 0 if all(r['success'] for r in results) else 1


if __name__ == '__main__':
    sys.exit(main())
