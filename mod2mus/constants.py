# Constants for mod2mus
#

# Version information.  Update BUILD_VERSION with every significant bugfix;
# update MINOR_VERSION with every feature addition
MAJOR_VERSION = 0
MINOR_VERSION = 1
BUILD_VERSION = 0

MOD2MUS_VERSION = f"{MAJOR_VERSION}.{MINOR_VERSION}.{BUILD_VERSION}"
MOD2MUS_RELEASE = f"{MAJOR_VERSION}.{MINOR_VERSION}"

# ProTracker MOD constants (all multi-byte fields are big-endian)
MOD_SONG_NAME_LEN = 20
MOD_SAMPLE_NAME_LEN = 22
MOD_SAMPLE_HEADER_LEN = 30
MOD_NUM_SAMPLES = 31
MOD_MAX_ORDERS = 128
MOD_MAX_PATTERN_INDEX = 127
MOD_HEADER_LEN = 1084         # name + sample headers + order count + restart + order list + signature
MOD_ROWS_PER_PATTERN = 64
MOD_CELL_LEN = 4
MOD_NO_PERIOD = 0xFFF         # some trackers write this instead of 0 for "no note"

# Signatures we accept, and the channel count each one implies
MOD_SIGNATURES = {
    b'1CHN': 1,
    b'2CHN': 2,
    b'3CHN': 3,
    b'M.K.': 4,
}

# ProTracker effect commands (high nibble of the third cell byte)
MOD_FX_ARPEGGIO = 0x0
MOD_FX_PORTA_UP = 0x1
MOD_FX_PORTA_DOWN = 0x2
MOD_FX_TONE_PORTA = 0x3
MOD_FX_VIBRATO = 0x4
MOD_FX_TONE_PORTA_VOL_SLIDE = 0x5
MOD_FX_VIBRATO_VOL_SLIDE = 0x6
MOD_FX_TREMOLO = 0x7
MOD_FX_PANNING = 0x8
MOD_FX_SAMPLE_OFFSET = 0x9
MOD_FX_VOL_SLIDE = 0xA
MOD_FX_POSITION_JUMP = 0xB
MOD_FX_SET_VOLUME = 0xC
MOD_FX_PATTERN_BREAK = 0xD
MOD_FX_EXTENDED = 0xE
MOD_FX_SET_SPEED = 0xF

# Extended (Exy) sub-commands, keyed by the parameter's high nibble
MOD_EFX_FINE_PORTA_UP = 0x1
MOD_EFX_FINE_PORTA_DOWN = 0x2
MOD_EFX_RETRIGGER = 0x9
MOD_EFX_FINE_VOL_UP = 0xA
MOD_EFX_FINE_VOL_DOWN = 0xB
MOD_EFX_NOTE_CUT = 0xC

# Three octaves of ProTracker periods (finetune 0), C-1 through B-3
PROTRACKER_PERIODS = (
    856, 808, 762, 720, 678, 640, 604, 570, 538, 508, 480, 453,
    428, 404, 381, 360, 339, 320, 302, 285, 269, 254, 240, 226,
    214, 202, 190, 180, 170, 160, 151, 143, 135, 127, 120, 113,
)

NO_NOTE = 0
NO_INSTRUMENT = 0

# MUS (Psycho Pinball / Micro Machines 2) constants (all multi-byte fields are little-endian)
MUS_SONG_ID = b'SONG'
MUS_SAMPLE_ID = b'SMPL'
MUS_NAME_LEN = 32
MUS_NUM_SAMPLES = MOD_NUM_SAMPLES
MUS_SAMPLE_REF_LEN = 34
MUS_SONG_HEADER_LEN = 4 + 4 + MUS_NAME_LEN + MUS_NUM_SAMPLES * MUS_SAMPLE_REF_LEN + 2 + 4 + 4 + 4
MUS_SAMPLE_HEADER_LEN = 4 + 4 + MUS_NAME_LEN + 4 + 4
MUS_MAX_VOLUME = 64

# MUS event commands
MUS_CMD_SET_VOLUME = 0x00
MUS_CMD_FINE_VOL_UP = 0x01
MUS_CMD_FINE_VOL_DOWN = 0x02
MUS_CMD_FINE_PORTA_UP = 0x03
MUS_CMD_FINE_PORTA_DOWN = 0x04
MUS_CMD_SAMPLE_OFFSET = 0x06
MUS_CMD_TONE_PORTA = 0x07
MUS_CMD_TONE_PORTA_VOL_SLIDE = 0x08
MUS_CMD_VIBRATO = 0x09
MUS_CMD_VIBRATO_VOL_SLIDE = 0x0A
MUS_CMD_ARPEGGIO = 0x0B
MUS_CMD_PORTA_UP = 0x0C
MUS_CMD_PORTA_DOWN = 0x0D
MUS_CMD_VOL_SLIDE = 0x0E
MUS_CMD_RETRIGGER = 0x0F
MUS_CMD_TREMOLO = 0x10
MUS_CMD_NOTE_CUT = 0x11
MUS_CMD_SET_SPEED = 0x12
MUS_CMD_NONE = 0x14

# Event stream encoding
MUS_REPEAT_FLAG = 0x80        # a count byte of 0x80 means "repeat once"; also the continuation bit
MUS_MAX_REPEAT_BYTE = 0xFF
CHANNEL_STATE_UNSET = 0xFF    # never a legal note, instrument or command

