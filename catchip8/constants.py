"""Fixed machine dimensions, the built-in font and front-end constants."""

# ============================================================================
# MACHINE
# ============================================================================

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
FONT_START = 0x000

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
SPRITE_WIDTH = 8

STACK_SIZE = 16
NUM_REGISTERS = 16
NUM_KEYS = 16

# Register VF doubles as the carry/borrow/collision flag
FLAG_REGISTER = 0xF

# ============================================================================
# CHIP-8 FONT
# ============================================================================

# Standard 4x5 font (0-F) - 80 bytes at FONT_START
FONT_4X5 = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
FONT_GLYPH_SIZE = 5

# ============================================================================
# KEYBOARD MAPPING
# ============================================================================

# CHIP-8 Hex Keypad    PC Keyboard
#  1 2 3 C             1 2 3 4
#  4 5 6 D      →      Q W E R
#  7 8 9 E             A S D F
#  A 0 B F             Z X C V

KEYBOARD_MAP = {
    '1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
    'q': 0x4, 'w': 0x5, 'e': 0x6, 'r': 0xD,
    'a': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
    'z': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF,
}

# ============================================================================
# WINDOW
# ============================================================================

STATUS_BAR_HEIGHT = 28

COLORS = {
    'bg': '#0C0C0C',
    'status_bg': '#1E1E1E',
    'status_fg': '#707070',
    'accent': '#4A9EFF',
}

AUDIO_SAMPLE_RATE = 44100
AUDIO_VOLUME = 0.25
