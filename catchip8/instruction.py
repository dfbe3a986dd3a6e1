"""
CHIP-8 instruction set and decoder.

Operand fields used throughout (always derived with the masks below):

- nnn: 12-bit address, the lowest 12 bits of the opcode
- nn:  8-bit constant, the lowest 8 bits
- n:   4-bit constant, the lowest 4 bits
- x:   register index, the low nibble of the high byte
- y:   register index, the high nibble of the low byte
"""

from dataclasses import dataclass
from enum import Enum

GROUP_MASK = 0xF000
X_MASK = 0x0F00
Y_MASK = 0x00F0
N_MASK = 0x000F
NN_MASK = 0x00FF
NNN_MASK = 0x0FFF


class Op(Enum):
    """Instruction tag: mnemonic plus the operand layout used for display"""

    SYS = ("SYS", "nnn")      # 0NNN: Call machine code routine (ignored)
    CLS = ("CLS", "")         # 00E0: Clear the display
    RET = ("RET", "")         # 00EE: Return from subroutine
    JMP = ("JMP", "nnn")      # 1NNN: Jump to NNN
    CALL = ("CALL", "nnn")    # 2NNN: Call subroutine at NNN
    SKEB = ("SKEB", "x,nn")   # 3XNN: Skip if Vx == NN
    SKNEB = ("SKNEB", "x,nn") # 4XNN: Skip if Vx != NN
    SKE = ("SKE", "x,y")      # 5XY0: Skip if Vx == Vy
    LDB = ("LDB", "x,nn")     # 6XNN: Vx = NN
    ADDB = ("ADDB", "x,nn")   # 7XNN: Vx += NN (no carry flag)
    LD = ("LD", "x,y")        # 8XY0: Vx = Vy
    OR = ("OR", "x,y")        # 8XY1: Vx |= Vy
    AND = ("AND", "x,y")      # 8XY2: Vx &= Vy
    XOR = ("XOR", "x,y")      # 8XY3: Vx ^= Vy
    ADD = ("ADD", "x,y")      # 8XY4: Vx += Vy, VF = carry
    SUB = ("SUB", "x,y")      # 8XY5: Vx -= Vy, VF = NOT borrow
    SHR = ("SHR", "x,y")      # 8XY6: Vx >>= 1, VF = LSB
    SUBR = ("SUBR", "x,y")    # 8XY7: Vx = Vy - Vx, VF = NOT borrow
    SHL = ("SHL", "x,y")      # 8XYE: Vx <<= 1, VF = MSB
    SKNE = ("SKNE", "x,y")    # 9XY0: Skip if Vx != Vy
    LDI = ("LDI", "nnn")      # ANNN: I = NNN
    JMPZ = ("JMPZ", "nnn")    # BNNN: Jump to NNN + V0
    RND = ("RND", "x,nn")     # CXNN: Vx = random & NN
    DRAW = ("DRAW", "x,y,n")  # DXYN: Draw 8xN sprite at (Vx, Vy)
    SKP = ("SKP", "x")        # EX9E: Skip if key Vx pressed
    SKNP = ("SKNP", "x")      # EXA1: Skip if key Vx not pressed
    LDFT = ("LDFT", "x")      # FX07: Vx = delay timer
    LDK = ("LDK", "x")        # FX0A: Wait for key release, Vx = key
    LDDT = ("LDDT", "x")      # FX15: delay timer = Vx
    LDST = ("LDST", "x")      # FX18: sound timer = Vx
    ADDI = ("ADDI", "x")      # FX1E: I += Vx
    FONT = ("FONT", "x")      # FX29: I = glyph address of digit Vx
    BCD = ("BCD", "x")        # FX33: BCD of Vx at I, I+1, I+2
    SREG = ("SREG", "x")      # FX55: Store V0..Vx at I
    LREG = ("LREG", "x")      # FX65: Load V0..Vx from I
    ERR = ("ERR", "raw")      # Unrecognized opcode

    def __init__(self, mnemonic: str, operands: str):
        self.mnemonic = mnemonic
        self.operands = tuple(operands.split(",")) if operands else ()


# Second-level selectors
_GROUP_0 = {0x0E0: Op.CLS, 0x0EE: Op.RET}

_GROUP_8 = {
    0x0: Op.LD, 0x1: Op.OR, 0x2: Op.AND, 0x3: Op.XOR, 0x4: Op.ADD,
    0x5: Op.SUB, 0x6: Op.SHR, 0x7: Op.SUBR, 0xE: Op.SHL,
}

_GROUP_E = {0x9E: Op.SKP, 0xA1: Op.SKNP}

_GROUP_F = {
    0x07: Op.LDFT, 0x0A: Op.LDK, 0x15: Op.LDDT, 0x18: Op.LDST, 0x1E: Op.ADDI,
    0x29: Op.FONT, 0x33: Op.BCD, 0x55: Op.SREG, 0x65: Op.LREG,
}

# Groups fully determined by the high nibble
_DIRECT = {
    0x1: Op.JMP, 0x2: Op.CALL, 0x3: Op.SKEB, 0x4: Op.SKNEB, 0x6: Op.LDB,
    0x7: Op.ADDB, 0xA: Op.LDI, 0xB: Op.JMPZ, 0xC: Op.RND, 0xD: Op.DRAW,
}


@dataclass(frozen=True)
class Instruction:
    """A decoded opcode: the tag plus the raw word its operands come from"""
    op: Op
    opcode: int

    @property
    def x(self) -> int:
        return (self.opcode & X_MASK) >> 8

    @property
    def y(self) -> int:
        return (self.opcode & Y_MASK) >> 4

    @property
    def n(self) -> int:
        return self.opcode & N_MASK

    @property
    def nn(self) -> int:
        return self.opcode & NN_MASK

    @property
    def nnn(self) -> int:
        return self.opcode & NNN_MASK

    def _format_operand(self, kind: str) -> str:
        if kind == "x":
            return f"V{self.x:X}"
        if kind == "y":
            return f"V{self.y:X}"
        if kind == "n":
            return f"0x{self.n:X}"
        if kind == "nn":
            return f"0x{self.nn:02X}"
        if kind == "nnn":
            return f"0x{self.nnn:03X}"
        return f"0x{self.opcode:04X}"

    def __str__(self):
        if not self.op.operands:
            return f"{self.op.mnemonic:<5}"
        operands = ", ".join(self._format_operand(kind) for kind in self.op.operands)
        return f"{self.op.mnemonic:<5} {operands}"


def decode(opcode: int) -> Instruction:
    """
    Decode a 16-bit opcode.

    Total over 0x0000-0xFFFF: words with no matching instruction decode to
    Op.ERR rather than raising.
    """
    if not 0 <= opcode <= 0xFFFF:
        raise ValueError(f"opcode out of range: {opcode:#x}")

    group = (opcode & GROUP_MASK) >> 12
    n = opcode & N_MASK

    if group == 0x0:
        op = _GROUP_0.get(opcode & NNN_MASK, Op.SYS)
    elif group == 0x5:
        op = Op.SKE if n == 0x0 else Op.ERR
    elif group == 0x8:
        op = _GROUP_8.get(n, Op.ERR)
    elif group == 0x9:
        op = Op.SKNE if n == 0x0 else Op.ERR
    elif group == 0xE:
        op = _GROUP_E.get(opcode & NN_MASK, Op.ERR)
    elif group == 0xF:
        op = _GROUP_F.get(opcode & NN_MASK, Op.ERR)
    else:
        op = _DIRECT[group]

    return Instruction(op, opcode)
