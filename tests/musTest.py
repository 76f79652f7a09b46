import io
import unittest
from contextlib import redirect_stdout
from parameterized import parameterized

from mod2mus import constants
from mod2mus import mus
from mod2mus.errors import Mod2MusValueError
from mod2mus.protracker import ModCell, ModSampleHeader, import_mod_binary
from mod2mus.testing_tools import build_mod_binary, pattern_bytes, BREAK_CELL


class TestNames(unittest.TestCase):
    def test_sample_name(self):
        self.assertEqual(mus.sample_name(1, b'kick\x01drum'.ljust(22, b'\0')),
                         b'01:kick drum'.ljust(32, b'\0'))
        self.assertEqual(mus.sample_name(31, b'\0' * 22), b'31:'.ljust(32, b'\0'))

    def test_sample_name_stops_at_zero(self):
        self.assertEqual(mus.sample_name(12, b'snare\0junk'.ljust(22, b'\0')), b'12:snare'.ljust(32, b'\0'))

    def test_sample_name_full_length(self):
        name = mus.sample_name(5, b'A' * 22)
        self.assertEqual(len(name), 32)
        self.assertEqual(name, b'05:' + b'A' * 22 + b'\0' * 7)

    def test_song_name(self):
        self.assertEqual(mus.song_name(b'my\tsong\x1f'.ljust(20, b'\0')), b'my song '.ljust(32, b'\0'))
        self.assertEqual(mus.song_name(b'Z' * 20), b'Z' * 20 + b'\0' * 12)


class TestSampleDescriptors(unittest.TestCase):
    @parameterized.expand([
        # name, length, loop_start, loop_length, expected loop_start, expected sample_size
        ("no_loop", 100, 0, 0, 200, 200),
        ("one_word_loop_means_none", 100, 0, 1, 200, 200),
        ("loop", 100, 10, 50, 20, 120),
        ("loop_to_end", 100, 20, 80, 40, 200),
        ("loop_starts_past_end", 100, 100, 10, 200, 200),
        ("loop_runs_past_end", 100, 90, 30, 180, 200),
    ])
    def test_loops(self, _, length, loop_start, loop_length, expected_loop_start, expected_size):
        mod_sample = ModSampleHeader(name=b'smp', length=length, loop_start=loop_start, loop_length=loop_length)
        header = mus.build_sample_header(3, mod_sample)

        self.assertEqual(header.loop_start, expected_loop_start)
        self.assertEqual(header.sample_size, expected_size)
        self.assertEqual(header.chunk_size, constants.MUS_SAMPLE_HEADER_LEN + expected_size)
        self.assertEqual(header.name, b'03:smp'.ljust(32, b'\0'))

    def test_sample_reference(self):
        ref = mus.build_sample_reference(2, ModSampleHeader(name=b'bass', length=10, finetune=0xF7, volume=80))
        self.assertEqual(ref, mus.MusSampleReference(b'02:bass'.ljust(32, b'\0'), 0x07, 64))

        ref = mus.build_sample_reference(2, ModSampleHeader(name=b'bass', length=1, finetune=3, volume=40))
        self.assertEqual(ref.to_bytes(), b'\0' * constants.MUS_SAMPLE_REF_LEN)


class TestMusExport(unittest.TestCase):
    def setUp(self):
        self.samples = [
            ModSampleHeader(name=b'first', length=4, finetune=1, volume=64),
            ModSampleHeader(name=b'empty', length=1, volume=64),
            ModSampleHeader(name=b'looped', length=8, volume=32, loop_start=2, loop_length=3),
        ]
        self.sample_data = [
            bytes(range(0, 8)),
            b'\xEE\xEE',
            bytes(range(0x40, 0x50)),
        ]
        cells = {(0, 0): ModCell(428, 1, 0xC, 0x20), (1, 0): BREAK_CELL}
        binary = build_mod_binary([pattern_bytes(1, cells)], name=b'test song', signature=b'1CHN',
                                  samples=self.samples, sample_data=self.sample_data)
        self.mod_song = import_mod_binary(binary)

    def test_song_chunk(self):
        binary = mus.MUS().to_bin(self.mod_song)
        song_header = mus.MusSongHeader.from_bytes(binary)

        self.assertEqual(binary[0:4], b'SONG')
        self.assertEqual(binary[4:8], (constants.MUS_SONG_HEADER_LEN + 4).to_bytes(4, 'little'))
        self.assertEqual(song_header.name, b'test song'.ljust(32, b'\0'))
        self.assertEqual(song_header.num_channels, 1)
        self.assertEqual(song_header.restart_pos, 0)
        self.assertEqual(song_header.music_size, 4)
        self.assertEqual(song_header.samples[0].name, b'01:first'.ljust(32, b'\0'))
        self.assertEqual(song_header.samples[0].finetune, 1)
        self.assertEqual(song_header.samples[1], mus.MusSampleReference(b'\0' * 32, 0, 0))
        self.assertEqual(song_header.samples[2].volume, 32)

        music_start = constants.MUS_SONG_HEADER_LEN
        self.assertEqual(binary[music_start:music_start + 4], bytes([13, 1, 0x00, 0x20]))

    def test_sample_chunks(self):
        binary = mus.MUS().to_bin(self.mod_song)
        offset = constants.MUS_SONG_HEADER_LEN + 4

        first = mus.MusSampleHeader.from_bytes(binary, offset)
        self.assertEqual(first, mus.MusSampleHeader(b'01:first'.ljust(32, b'\0'), 8, 8))
        offset += constants.MUS_SAMPLE_HEADER_LEN
        self.assertEqual(binary[offset:offset + 8], self.sample_data[0])
        offset += 8

        # the one-word sample is dropped, but its bytes don't leak into the next sample
        looped = mus.MusSampleHeader.from_bytes(binary, offset)
        self.assertEqual(looped, mus.MusSampleHeader(b'03:looped'.ljust(32, b'\0'), 4, 10))
        self.assertTrue(looped.is_looped())
        offset += constants.MUS_SAMPLE_HEADER_LEN
        self.assertEqual(binary[offset:offset + 10], self.sample_data[2][:10])
        offset += 10

        self.assertEqual(offset, len(binary))

    def test_header_sizes(self):
        self.assertEqual(len(mus.MusSongHeader().to_bytes()), 1108)
        self.assertEqual(len(mus.MusSampleHeader().to_bytes()), 48)

    def test_empty_name_warning(self):
        binary = build_mod_binary([pattern_bytes(1)], name=b'', signature=b'1CHN')
        mod_song = import_mod_binary(binary)

        out = io.StringIO()
        with redirect_stdout(out):
            mus.MUS().to_bin(mod_song)
        self.assertIn("Warning: song name is empty", out.getvalue())

        out = io.StringIO()
        with redirect_stdout(out):
            mus.MUS().to_bin(mod_song, verbose=False)
        self.assertEqual(out.getvalue(), '')

    def test_no_warning_with_name(self):
        out = io.StringIO()
        with redirect_stdout(out):
            mus.MUS().to_bin(self.mod_song)
        self.assertEqual(out.getvalue(), '')

    def test_unknown_option(self):
        with self.assertRaises(Mod2MusValueError):
            mus.MUS().set_options(max_pattern_len=12)


if __name__ == '__main__':
    unittest.main()
