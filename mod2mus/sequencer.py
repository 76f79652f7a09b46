import collections
from dataclasses import dataclass
from mod2mus import base
from mod2mus import constants
from mod2mus.effects import translate_effect, PositionJump, PatternBreak
from mod2mus.protracker import period_to_note


"""
Walks a MOD song's order list and emits the MUS event stream.

Each channel's cell, once translated, is written in one of three ways:
 *  a full 4-byte event (note, instrument, command, parameter)
 *  nothing but a repeat count, when the cell is identical to the channel's last event.  A run of
    repeats shares a single count byte: 0x80 means one repeat, 0x81 two, up to 0xFF.
 *  nothing but a continuation bit OR'd into the last written command byte, when only the command
    and parameter match the channel's last event
"""


TranslatedEvent = collections.namedtuple('TranslatedEvent', ['note', 'instrument', 'command', 'param'])
SequencedMusic = collections.namedtuple('SequencedMusic', ['data', 'restart_offset'])


@dataclass
class ChannelState:
    note: int = constants.CHANNEL_STATE_UNSET
    instrument: int = constants.CHANNEL_STATE_UNSET
    command: int = constants.CHANNEL_STATE_UNSET
    param: int = constants.CHANNEL_STATE_UNSET
    repeat_offset: int = None  #: stream offset of this channel's open repeat count byte

    def matches(self, event):
        return (self.note, self.instrument, self.command, self.param) == tuple(event)

    def update(self, event):
        self.note, self.instrument, self.command, self.param = event


class PatternSequencer(base.Mod2MusBase):
    @classmethod
    def cts_type(cls):
        return 'Sequencer'

    def __init__(self):
        base.Mod2MusBase.__init__(self)
        self.data = bytearray()
        self.channel_states = []
        self.last_command_offset = None

    def sequence(self, mod_song):
        """
        Converts the song's patterns, in order list order, into a MUS event stream

        :param mod_song: the song to convert
        :type mod_song: protracker.ModSong
        :return: the event stream and the stream offset at which the restart order begins
        :rtype: SequencedMusic
        """
        header = mod_song.header
        self.data = bytearray()
        self.channel_states = [ChannelState() for _ in range(mod_song.num_channels)]
        self.last_command_offset = None

        restart_offset = None
        start_row = 0
        order = 0
        while order < header.num_orders:
            pattern = header.order_list[order]
            if restart_offset is None and order == header.restart_pos:
                restart_offset = len(self.data)

            next_order = order + 1
            for row in range(start_row, constants.MOD_ROWS_PER_PATTERN):
                start_row = 0
                signal = None
                for channel, state in enumerate(self.channel_states):
                    cell = mod_song.cell(pattern, row, channel)
                    translated = translate_effect(cell.effect, cell.param)
                    if isinstance(translated, (PositionJump, PatternBreak)):
                        signal = translated
                        break
                    event = TranslatedEvent(period_to_note(cell.period), cell.instrument, *translated)
                    self.emit(state, event)

                if isinstance(signal, PositionJump):
                    # Only forward jumps are taken; backward ones would loop forever
                    if signal.order > order:
                        next_order = signal.order
                    break
                if isinstance(signal, PatternBreak):
                    start_row = signal.row
                    break
            order = next_order

        if restart_offset is None:
            restart_offset = 0
        return SequencedMusic(bytes(self.data), restart_offset)

    def emit(self, state, event):
        """
        Appends one channel's event to the stream, compressed against that channel's last event

        :param state: the channel's playback state, updated in place
        :type state: ChannelState
        :param event: the translated cell
        :type event: TranslatedEvent
        """
        if state.matches(event):
            if state.repeat_offset is not None and self.data[state.repeat_offset] < constants.MUS_MAX_REPEAT_BYTE:
                self.data[state.repeat_offset] += 1
            else:
                state.repeat_offset = len(self.data)
                self.data.append(constants.MUS_REPEAT_FLAG)
            return
        state.repeat_offset = None

        if event.command == state.command and event.param == state.param:
            self.data[self.last_command_offset] |= constants.MUS_REPEAT_FLAG
            return

        self.last_command_offset = len(self.data) + 2
        self.data += bytes(event)
        state.update(event)
