# Convert a ProTracker .mod file into a Psycho Pinball / Micro Machines 2 .mus file

import argparse
import sys

from mod2mus import constants
from mod2mus import mus
from mod2mus import protracker
from mod2mus.errors import *

EXIT_OK = 0
EXIT_INPUT_ERROR = -1
EXIT_OUTPUT_ERROR = -2
EXIT_BAD_SIGNATURE = -3
EXIT_BAD_ORDER_COUNT = -4


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='mod2mus',
        description="Convert a ProTracker mod file (1CHN, 2CHN, 3CHN or M.K.) to a MUS file.")
    parser.add_argument('mod_in_file', nargs='?', help='mod filename to import')
    parser.add_argument('mus_out_file', nargs='?', help='mus filename to export')

    args = parser.parse_args(argv)
    if args.mus_out_file is None:
        print(f"mod2mus version {constants.MOD2MUS_VERSION}")
        parser.print_usage()
        return EXIT_OK

    try:
        mod_song = protracker.ProTracker().to_mod_song(args.mod_in_file)
    except Mod2MusIOError as e:
        print(e)
        return EXIT_INPUT_ERROR
    except Mod2MusSignatureError as e:
        print(e)
        return EXIT_BAD_SIGNATURE
    except Mod2MusOrderCountError as e:
        print(e)
        return EXIT_BAD_ORDER_COUNT

    try:
        mus.MUS().to_file(mod_song, args.mus_out_file)
    except Mod2MusIOError as e:
        print(e)
        return EXIT_OUTPUT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
