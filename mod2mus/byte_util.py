# Common byte functions

from mod2mus.errors import Mod2MusIOError


def little_endian_bytes(a_num, min_bytes=2):
    retval = bytearray()
    remaining = a_num
    while remaining != 0:
        retval.append(remaining & 0xFF)
        remaining >>= 8
    while len(retval) < min_bytes:
        retval.append(0)
    return retval


def big_endian_bytes(a_num, min_bytes=2):
    retval = bytearray()
    remaining = a_num
    while remaining != 0:
        retval.append(remaining & 0xFF)
        remaining >>= 8
    while len(retval) < min_bytes:
        retval.append(0)
    return retval[::-1]


def little_endian_int(a_bytearray, signed=False):
    return int.from_bytes(a_bytearray, byteorder='little', signed=signed)


def big_endian_int(a_bytearray, signed=False):
    return int.from_bytes(a_bytearray, byteorder='big', signed=signed)


def pad_or_truncate(to_pad, length):
    """
    Truncate or pad (with zeros) a fixed-width text field

    :param to_pad: text to pad
    :type to_pad: either string or bytes
    :param length: grow or shrink input to this length ("Procrustean bed")
    :type length: int
    :return: processed text field
    :rtype: bytes
    """
    if isinstance(to_pad, str):
        to_pad = to_pad.encode('latin-1')
    return bytes(to_pad).ljust(length, b'\0')[0:length]


def c_string(in_bytes):
    """
    Returns the bytes of a zero-padded text field up to (not including) the first zero
    """
    end = in_bytes.find(b'\0')
    if end < 0:
        return bytes(in_bytes)
    return bytes(in_bytes[:end])


def blank_control_chars(in_bytes):
    """
    Replaces control characters 0x01-0x1F with spaces.  Zeros are left alone.

    :param in_bytes: text field
    :type in_bytes: bytes
    :return: cleaned text field
    :rtype: bytes
    """
    return bytes(0x20 if 0x00 < c < 0x20 else c for c in in_bytes)


def get_chars(in_bytes, trim_nulls=True):
    """
    Convert zero-padded text field into string

    :param in_bytes: text field in bytes
    :type in_bytes: bytes
    :param trim_nulls: if true, trim off the zero-padding, defaults to True
    :type trim_nulls: bool, optional
    :return: String conversion
    :rtype: str
    """
    result = bytes(in_bytes).decode('Latin-1')
    if trim_nulls:
        result = result.strip('\0')  # no interpretation, preserve encoding
    return result


# group()/join()/hexdump()
# adapted from http://code.activestate.com/recipes/579064-hex-dump/
def group(a, *ns):
    for n in ns:
        a = [a[i:i + n] for i in range(0, len(a), n)]
    return a


def join(a, *cs):
    return [cs[0].join(join(t, *cs[1:])) for t in a] if cs else a


def hexdump(data, start=0):
    toHex = lambda c: '{:02X}'.format(c)
    toChr = lambda c: chr(c) if 32 <= c < 127 else '.'
    make = lambda f, *cs: join(group(list(map(f, data)), 8, 2), *cs)
    hs = make(toHex, '  ', ' ')
    cs = make(toChr, ' ', '')
    for i, (h, c) in enumerate(zip(hs, cs)):
        print('{:010X}: {:48}  {:16}'.format(i * 16 + start, h, c))


def read_binary_file(path_and_filename):
    try:
        with open(path_and_filename, mode='rb') as in_file:
            return in_file.read()
    except OSError as e:
        raise Mod2MusIOError(f'Error: cannot open input file "{path_and_filename}"') from e


def write_binary_file(path_and_filename, binary):
    try:
        with open(path_and_filename, 'wb') as out_file:
            out_file.write(binary)
    except OSError as e:
        raise Mod2MusIOError(f'Error: cannot open output file "{path_and_filename}"') from e
