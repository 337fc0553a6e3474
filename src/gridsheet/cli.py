import argparse
import logging
import os
import sys

from .errors import SheetError
from .main import run_sheet
from .render import to_csv
from .sheet import Sheet


def build_parser():
    parser = argparse.ArgumentParser(description='Minimal spreadsheet engine')
    parser.add_argument('filename', help='Path to the sheet .json file')
    parser.add_argument('-c', '--command', action='append', default=[], dest='commands',
                        help="Edit to apply, e.g. 'b1=1000', 'b2==SUM(a1, a2)' or '+row:1:after'")
    parser.add_argument('--undo', type=int, default=0, metavar='N',
                        help='Step back N versions before applying the edits')
    parser.add_argument('--csv', action='store_true',
                        help='Write the current grid next to the sheet as a .csv file')
    parser.add_argument('--save', action='store_true', help='Write the edited history back to the file')
    parser.add_argument('--debug', action='store_true', help='Verbose logging and CSV output')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        if os.path.isfile(args.filename):
            sheet = Sheet.load(args.filename)
        elif args.save:
            sheet = Sheet()
        else:
            print(f"Error: File '{args.filename}' not found")
            return 1

        for _ in range(args.undo):
            if not sheet.undo():
                break

        run_sheet(sheet, args.commands, debug=args.debug)

        if args.csv:
            csv_filename = os.path.splitext(args.filename)[0] + '.csv'
            with open(csv_filename, 'w', newline='') as csvfile:
                csvfile.write(to_csv(sheet.current))
            print(f"\nGrid state saved to: {csv_filename}")

        if args.save:
            sheet.save(args.filename)
            print(f"Sheet saved to: {args.filename}")
    except (SheetError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
