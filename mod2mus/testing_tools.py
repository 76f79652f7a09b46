from mod2mus import constants
from mod2mus.protracker import ModCell, ModHeader, ModSampleHeader, EMPTY_CELL


def pattern_bytes(num_channels, cells=None):
    """
    Packs a pattern from a sparse description

    :param num_channels: channels per row
    :type num_channels: int
    :param cells: {(row, channel): ModCell}; missing cells are empty
    :type cells: dict
    :return: one pattern of MOD data
    :rtype: bytes
    """
    cells = cells or {}
    result = bytearray()
    for row in range(constants.MOD_ROWS_PER_PATTERN):
        for channel in range(num_channels):
            result += cells.get((row, channel), EMPTY_CELL).to_bytes()
    return bytes(result)


def uniform_pattern_bytes(num_channels, cell):
    """Packs a pattern that holds the same cell in every row and channel"""
    return bytes(cell.to_bytes()) * (constants.MOD_ROWS_PER_PATTERN * num_channels)


def build_mod_binary(patterns, order_list=(0,), num_orders=None, restart_pos=0, name=b'test song',
                     signature=b'M.K.', samples=(), sample_data=None):
    """
    Builds a complete MOD file in memory

    :param patterns: packed patterns, in pattern number order
    :type patterns: list of bytes
    :param order_list: played pattern numbers; the rest of the order list is zero
    :type order_list: sequence of int
    :param num_orders: order count to write, defaults to len(order_list)
    :type num_orders: int
    :param samples: sample headers for the first slots; the rest are empty
    :type samples: sequence of ModSampleHeader
    :param sample_data: raw data for each given sample, defaults to a byte ramp of the declared length
    :type sample_data: list of bytes
    :return: MOD file contents
    :rtype: bytes
    """
    header = ModHeader()
    header.name = name
    header.signature = signature
    header.num_orders = len(order_list) if num_orders is None else num_orders
    header.restart_pos = restart_pos
    header.order_list = list(order_list) + [0] * (constants.MOD_MAX_ORDERS - len(order_list))
    header.samples = list(samples) + [ModSampleHeader()
                                      for _ in range(constants.MOD_NUM_SAMPLES - len(samples))]
    if sample_data is None:
        sample_data = [bytes(i & 0xFF for i in range(s.byte_length)) for s in samples]

    result = bytearray(header.to_bytes())
    for pattern in patterns:
        result += pattern
    for data in sample_data:
        result += data
    return bytes(result)


def note_cell(note, instrument=1, effect=constants.MOD_FX_SET_VOLUME, param=0x40):
    """A cell playing note number 1-36 (table period), by default with a set volume effect"""
    return ModCell(constants.PROTRACKER_PERIODS[note - 1], instrument, effect, param)


BREAK_CELL = ModCell(0, 0, constants.MOD_FX_PATTERN_BREAK, 0x00)
