# Print the headers of a .mus file and hexdump its event stream

import argparse

from mod2mus import constants
from mod2mus import mus
from mod2mus.byte_util import read_binary_file, hexdump, get_chars


def main():
    parser = argparse.ArgumentParser(description="Dump the contents of a MUS file.")
    parser.add_argument('mus_in_file', help='mus filename to dump')
    parser.add_argument('-n', '--no_events', action='store_true', help='skip the event stream hexdump')

    args = parser.parse_args()

    binary = read_binary_file(args.mus_in_file)
    song_header = mus.MusSongHeader.from_bytes(binary)

    print('Song:          "%s"' % get_chars(song_header.name))
    print('Channels:      %d' % song_header.num_channels)
    print('Restart:       $%04X' % song_header.restart_pos)
    print('Music size:    %d bytes' % song_header.music_size)
    for i, sample_ref in enumerate(song_header.samples):
        if sample_ref.name.strip(b'\0'):
            print('  %2d "%s" finetune %d volume %d'
                  % (i + 1, get_chars(sample_ref.name), sample_ref.finetune, sample_ref.volume))

    music_start = constants.MUS_SONG_HEADER_LEN
    if not args.no_events:
        print('\nEvents:')
        hexdump(binary[music_start:music_start + song_header.music_size])

    print('\nSample chunks:')
    offset = music_start + song_header.music_size
    while offset < len(binary):
        sample_header = mus.MusSampleHeader.from_bytes(binary, offset)
        loop = '$%06X' % sample_header.loop_start if sample_header.is_looped() else 'none'
        print('  "%s" size %d loop %s' % (get_chars(sample_header.name), sample_header.sample_size, loop))
        offset += sample_header.chunk_size


if __name__ == "__main__":
    main()
