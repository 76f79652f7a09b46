import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from mod2mus import convert
from mod2mus import mus
from mod2mus.byte_util import read_binary_file, write_binary_file
from mod2mus.protracker import ModCell, ModSampleHeader
from mod2mus.testing_tools import build_mod_binary, pattern_bytes, BREAK_CELL


class TestConvert(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.mod_file = os.path.join(self.tmp_dir.name, 'in.mod')
        self.mus_file = os.path.join(self.tmp_dir.name, 'out.mus')

    def tearDown(self):
        self.tmp_dir.cleanup()

    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            result = convert.main(argv)
        return result, out.getvalue()

    def write_mod(self, **kwargs):
        cells = {(0, 0): ModCell(428, 1, 0xC, 0x20), (1, 0): BREAK_CELL}
        samples = [ModSampleHeader(name=b'blip', length=2, volume=64)]
        write_binary_file(self.mod_file, build_mod_binary([pattern_bytes(1, cells)], samples=samples, **kwargs))

    def test_convert(self):
        self.write_mod(signature=b'1CHN')
        result, _ = self.run_main([self.mod_file, self.mus_file])

        self.assertEqual(result, convert.EXIT_OK)
        binary = read_binary_file(self.mus_file)
        song_header = mus.MusSongHeader.from_bytes(binary)
        self.assertEqual(song_header.music_size, 4)
        self.assertEqual(len(binary), 1108 + 4 + 48 + 4)

    def test_usage(self):
        result, output = self.run_main([])
        self.assertEqual(result, convert.EXIT_OK)
        self.assertIn("usage", output)

        result, _ = self.run_main([self.mod_file])
        self.assertEqual(result, convert.EXIT_OK)
        self.assertFalse(os.path.exists(self.mus_file))

    def test_missing_input(self):
        result, output = self.run_main([self.mod_file, self.mus_file])
        self.assertEqual(result, convert.EXIT_INPUT_ERROR)
        self.assertIn("cannot open input file", output)
        self.assertFalse(os.path.exists(self.mus_file))

    def test_bad_output(self):
        self.write_mod(signature=b'1CHN')
        bad_path = os.path.join(self.tmp_dir.name, 'no_such_dir', 'out.mus')
        result, output = self.run_main([self.mod_file, bad_path])
        self.assertEqual(result, convert.EXIT_OUTPUT_ERROR)
        self.assertIn("cannot open output file", output)

    def test_bad_signature(self):
        self.write_mod(signature=b'6CHN')
        result, _ = self.run_main([self.mod_file, self.mus_file])
        self.assertEqual(result, convert.EXIT_BAD_SIGNATURE)
        self.assertFalse(os.path.exists(self.mus_file))

    def test_bad_order_count(self):
        self.write_mod(signature=b'1CHN', num_orders=130)
        result, _ = self.run_main([self.mod_file, self.mus_file])
        self.assertEqual(result, convert.EXIT_BAD_ORDER_COUNT)
        self.assertFalse(os.path.exists(self.mus_file))

    def test_truncated_input_warns(self):
        self.write_mod(signature=b'1CHN', sample_data=[b'\x01'])
        result, output = self.run_main([self.mod_file, self.mus_file])
        self.assertEqual(result, convert.EXIT_OK)
        self.assertIn("Warning: input file is truncated", output)


if __name__ == '__main__':
    unittest.main()
