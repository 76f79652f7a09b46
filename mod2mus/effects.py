# Translation of ProTracker effects into MUS event commands
#
# Two MOD effects don't translate into commands at all: position jump (Bxx) and pattern break
# (Dxx) steer the order/row walk instead, so they come back as control signals for the sequencer.

import collections
from mod2mus import constants
from mod2mus.errors import *


TranslatedEffect = collections.namedtuple('TranslatedEffect', ['command', 'param'])
PositionJump = collections.namedtuple('PositionJump', ['order'])
PatternBreak = collections.namedtuple('PatternBreak', ['row'])

NO_EFFECT = TranslatedEffect(constants.MUS_CMD_NONE, 0x00)

# MOD effect -> MUS command, for the effects whose parameter passes through unchanged
MOD_TO_MUS_COMMANDS = {
    constants.MOD_FX_ARPEGGIO: constants.MUS_CMD_ARPEGGIO,
    constants.MOD_FX_PORTA_UP: constants.MUS_CMD_PORTA_UP,
    constants.MOD_FX_PORTA_DOWN: constants.MUS_CMD_PORTA_DOWN,
    constants.MOD_FX_TONE_PORTA: constants.MUS_CMD_TONE_PORTA,
    constants.MOD_FX_VIBRATO: constants.MUS_CMD_VIBRATO,
    constants.MOD_FX_TONE_PORTA_VOL_SLIDE: constants.MUS_CMD_TONE_PORTA_VOL_SLIDE,
    constants.MOD_FX_VIBRATO_VOL_SLIDE: constants.MUS_CMD_VIBRATO_VOL_SLIDE,
    constants.MOD_FX_TREMOLO: constants.MUS_CMD_TREMOLO,
    constants.MOD_FX_SAMPLE_OFFSET: constants.MUS_CMD_SAMPLE_OFFSET,
    constants.MOD_FX_VOL_SLIDE: constants.MUS_CMD_VOL_SLIDE,
    constants.MOD_FX_SET_VOLUME: constants.MUS_CMD_SET_VOLUME,
    constants.MOD_FX_SET_SPEED: constants.MUS_CMD_SET_SPEED,
}

# Extended effect sub-command (parameter high nibble) -> MUS command
MOD_EXTENDED_TO_MUS_COMMANDS = {
    constants.MOD_EFX_FINE_PORTA_UP: constants.MUS_CMD_FINE_PORTA_UP,
    constants.MOD_EFX_FINE_PORTA_DOWN: constants.MUS_CMD_FINE_PORTA_DOWN,
    constants.MOD_EFX_RETRIGGER: constants.MUS_CMD_RETRIGGER,
    constants.MOD_EFX_FINE_VOL_UP: constants.MUS_CMD_FINE_VOL_UP,
    constants.MOD_EFX_FINE_VOL_DOWN: constants.MUS_CMD_FINE_VOL_DOWN,
    constants.MOD_EFX_NOTE_CUT: constants.MUS_CMD_NOTE_CUT,
}


def translate_effect(effect, param):
    """
    Converts a MOD effect and its parameter into a MUS command, or into a control signal for
    effects that alter playback position.

    :param effect: MOD effect nibble, 0x0-0xF
    :type effect: int
    :param param: MOD effect parameter byte
    :type param: int
    :return: the translated command, or a jump/break signal
    :rtype: TranslatedEffect, PositionJump or PatternBreak
    """
    if not (0 <= effect <= 0x0F and 0 <= param <= 0xFF):
        raise Mod2MusValueError(f"Error: illegal MOD effect {effect:X}{param:02X}")

    if effect == constants.MOD_FX_POSITION_JUMP:
        return PositionJump(param)
    if effect == constants.MOD_FX_PATTERN_BREAK:
        # The break row in the parameter is ignored; playback always resumes at row 0
        return PatternBreak(0)
    if effect == constants.MOD_FX_EXTENDED:
        return translate_extended_effect(param)
    if effect == constants.MOD_FX_ARPEGGIO and param == 0:
        return NO_EFFECT
    if effect in MOD_TO_MUS_COMMANDS:
        return TranslatedEffect(MOD_TO_MUS_COMMANDS[effect], param)
    return NO_EFFECT


def translate_extended_effect(param):
    """
    Converts the parameter of a MOD Exy effect.  Only the low nibble survives as the MUS parameter.

    :param param: MOD effect parameter byte (high nibble selects the sub-command)
    :type param: int
    :return: the translated command
    :rtype: TranslatedEffect
    """
    sub_command = param >> 4
    if sub_command in MOD_EXTENDED_TO_MUS_COMMANDS:
        return TranslatedEffect(MOD_EXTENDED_TO_MUS_COMMANDS[sub_command], param & 0x0F)
    return NO_EFFECT
