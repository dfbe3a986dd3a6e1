"""
CHIP-8 virtual machine.

Owns memory, registers, stack and timers, and composes the framebuffer
and keypad. The caller drives it one instruction at a time with step()
and is responsible for timer decrement and key event delivery.
"""

import logging
import random
from typing import List, Optional

from .config import Quirks
from .constants import (
    FLAG_REGISTER, FONT_4X5, FONT_GLYPH_SIZE, FONT_START, MEMORY_SIZE,
    NUM_REGISTERS, PROGRAM_START, STACK_SIZE,
)
from .errors import (
    Chip8Fault, InvalidFontDigitError, MachineHalted, MemoryAccessError,
    RomTooLargeError, StackOverflowError, StackUnderflowError,
)
from .framebuffer import Framebuffer
from .instruction import Instruction, Op, decode
from .keypad import Keypad

logger = logging.getLogger(__name__)

# Largest ROM that keeps PROGRAM_START + len(rom) below MEMORY_SIZE
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START - 1

# 8XYN register-to-register group
_ALU_OPS = frozenset({
    Op.LD, Op.OR, Op.AND, Op.XOR, Op.ADD, Op.SUB, Op.SUBR, Op.SHR, Op.SHL,
})


class Chip8CPU:
    """
    CHIP-8 CPU implementing the 35 original opcodes.

    Quirk-dependent opcodes follow the Quirks value given at construction.
    Any fatal condition halts the machine and raises a Chip8Fault subclass.
    """

    def __init__(self, rom: bytes, quirks: Optional[Quirks] = None, rng=None):
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLargeError(len(rom), MAX_ROM_SIZE)

        self.rom = bytes(rom)
        self.quirks = quirks or Quirks()
        self._random = rng or random
        self.reset()

    def reset(self):
        """Reset CPU to initial power-on state with the ROM loaded"""
        # Main memory (4KB): font, then the program at 0x200
        self.memory = bytearray(MEMORY_SIZE)
        self.memory[FONT_START:FONT_START + len(FONT_4X5)] = FONT_4X5
        self.memory[PROGRAM_START:PROGRAM_START + len(self.rom)] = self.rom

        # 16 general-purpose 8-bit registers V0-VF
        self.v: List[int] = [0] * NUM_REGISTERS

        # Index register
        self.i = 0

        # Program counter
        self.pc = PROGRAM_START

        # Stack (16 levels of return addresses)
        self.stack: List[int] = [0] * STACK_SIZE
        self.sp = 0

        # Timers, decremented by the caller
        self.delay_timer = 0
        self.sound_timer = 0

        self.framebuffer = Framebuffer()
        self.keypad = Keypad()

        self.halted = False
        self.last_instruction: Optional[Instruction] = None

    # ==================== FETCH / EXECUTE ====================

    def step(self):
        """Fetch, decode and execute one instruction"""
        if self.halted:
            raise MachineHalted("machine is halted", self.pc)

        try:
            instr = decode(self._fetch())
            self.last_instruction = instr
            self._execute(instr)
        except Chip8Fault as exc:
            self._halt(exc)
            raise

    def _halt(self, exc: Chip8Fault):
        self.halted = True
        logger.error("CHIP-8 halted: %s", exc)

    def _fetch(self) -> int:
        """Read the big-endian opcode at pc"""
        if not 0 <= self.pc < MEMORY_SIZE - 1:
            raise MemoryAccessError("program counter has exceeded memory size", self.pc)
        return (self.memory[self.pc] << 8) | self.memory[self.pc + 1]

    def _check_range(self, addr: int, length: int):
        if addr < 0 or addr + length > MEMORY_SIZE:
            raise MemoryAccessError(
                f"access of {length} bytes at 0x{addr:X} is outside memory", self.pc - 2)

    def _execute(self, instr: Instruction):
        """Execute a decoded instruction"""
        op = instr.op
        x = instr.x
        y = instr.y

        # Default for most instructions; jumps overwrite it, LDK rewinds it
        self.pc += 2

        # ==================== FLOW CONTROL ====================
        if op is Op.SYS or op is Op.ERR:
            # Machine code routines are not emulated; unknown opcodes are no-ops
            if op is Op.ERR:
                logger.debug("Ignoring unrecognized opcode 0x%04X at 0x%03X",
                             instr.opcode, self.pc - 2)

        elif op is Op.CLS:
            self.framebuffer.clear()

        elif op is Op.RET:
            if self.sp == 0:
                raise StackUnderflowError("return with empty stack", self.pc - 2)
            self.sp -= 1
            self.pc = self.stack[self.sp] + 2

        elif op is Op.JMP:
            self.pc = instr.nnn

        elif op is Op.CALL:
            if self.sp >= STACK_SIZE:
                raise StackOverflowError("call stack is full", self.pc - 2)
            self.stack[self.sp] = self.pc - 2
            self.sp += 1
            self.pc = instr.nnn

        elif op is Op.JMPZ:
            # Quirk: CHIP-48 adds VX (X = top nibble of NNN) instead of V0
            register = x if self.quirks.jumping else 0
            self.pc = instr.nnn + self.v[register]

        # ==================== CONDITIONAL SKIPS ====================
        elif op is Op.SKEB:
            if self.v[x] == instr.nn:
                self.pc += 2

        elif op is Op.SKNEB:
            if self.v[x] != instr.nn:
                self.pc += 2

        elif op is Op.SKE:
            if self.v[x] == self.v[y]:
                self.pc += 2

        elif op is Op.SKNE:
            if self.v[x] != self.v[y]:
                self.pc += 2

        elif op is Op.SKP:
            if self.keypad.is_pressed(self.v[x]):
                self.pc += 2

        elif op is Op.SKNP:
            if not self.keypad.is_pressed(self.v[x]):
                self.pc += 2

        # ==================== REGISTERS ====================
        elif op is Op.LDB:
            self.v[x] = instr.nn

        elif op is Op.ADDB:
            self.v[x] = (self.v[x] + instr.nn) & 0xFF

        elif op is Op.RND:
            self.v[x] = self._random.randint(0, 255) & instr.nn

        elif op in _ALU_OPS:
            self._execute_8xxx(op, x, y)

        # ==================== DISPLAY ====================
        elif op is Op.DRAW:
            self._draw(x, y, instr.n)

        # ==================== INDEX / MEMORY ====================
        elif op is Op.LDI:
            self.i = instr.nnn

        elif op is Op.ADDI:
            self.i = (self.i + self.v[x]) & 0xFFFF

        elif op is Op.FONT:
            digit = self.v[x]
            if digit > 0xF:
                raise InvalidFontDigitError(f"no font glyph for 0x{digit:02X}", self.pc - 2)
            self.i = FONT_START + digit * FONT_GLYPH_SIZE

        elif op is Op.BCD:
            self._check_range(self.i, 3)
            value = self.v[x]
            self.memory[self.i] = value // 100
            self.memory[self.i + 1] = (value // 10) % 10
            self.memory[self.i + 2] = value % 10

        elif op is Op.SREG:
            self._check_range(self.i, x + 1)
            self.memory[self.i:self.i + x + 1] = bytes(self.v[:x + 1])
            if self.quirks.memory:
                self.i = (self.i + x + 1) & 0xFFFF

        elif op is Op.LREG:
            self._check_range(self.i, x + 1)
            self.v[:x + 1] = self.memory[self.i:self.i + x + 1]
            if self.quirks.memory:
                self.i = (self.i + x + 1) & 0xFFFF

        # ==================== TIMERS / INPUT ====================
        elif op is Op.LDFT:
            self.v[x] = self.delay_timer

        elif op is Op.LDDT:
            self.delay_timer = self.v[x]

        elif op is Op.LDST:
            self.sound_timer = self.v[x]

        elif op is Op.LDK:
            # Re-executed every step until a key is released while armed
            key = self.keypad.poll_release()
            if key is None:
                self.pc -= 2
            else:
                self.v[x] = key

    def _execute_8xxx(self, op: Op, x: int, y: int):
        """Execute 8XYN arithmetic/logic opcodes"""
        v = self.v

        if op is Op.LD:
            v[x] = v[y]

        elif op in (Op.OR, Op.AND, Op.XOR):
            if op is Op.OR:
                v[x] |= v[y]
            elif op is Op.AND:
                v[x] &= v[y]
            else:
                v[x] ^= v[y]
            if self.quirks.vf_reset:
                v[FLAG_REGISTER] = 0

        elif op is Op.ADD:
            result = v[x] + v[y]
            v[x] = result & 0xFF
            v[FLAG_REGISTER] = 1 if result > 0xFF else 0

        elif op is Op.SUB:
            no_borrow = 1 if v[x] >= v[y] else 0
            v[x] = (v[x] - v[y]) & 0xFF
            v[FLAG_REGISTER] = no_borrow

        elif op is Op.SUBR:
            no_borrow = 1 if v[y] >= v[x] else 0
            v[x] = (v[y] - v[x]) & 0xFF
            v[FLAG_REGISTER] = no_borrow

        elif op is Op.SHR:
            # Quirk: COSMAC VIP shifts Vy into Vx
            if self.quirks.shifting:
                v[x] = v[y]
            lsb = v[x] & 0x01
            v[x] >>= 1
            v[FLAG_REGISTER] = lsb

        elif op is Op.SHL:
            if self.quirks.shifting:
                v[x] = v[y]
            msb = (v[x] >> 7) & 0x01
            v[x] = (v[x] << 1) & 0xFF
            v[FLAG_REGISTER] = msb

    def _draw(self, x: int, y: int, n: int):
        """DXYN: XOR the N-byte sprite at I onto the screen, VF = collision"""
        self._check_range(self.i, n)
        sprite = self.memory[self.i:self.i + n]
        collision = self.framebuffer.draw(self.v[x], self.v[y], n, sprite, self.quirks.wrap)
        self.v[FLAG_REGISTER] = 1 if collision else 0

    # ==================== INPUT HANDLING ====================

    def key_pressed(self, key: int):
        try:
            self.keypad.press(key)
        except Chip8Fault as exc:
            self._halt(exc)
            raise

    def key_released(self, key: int):
        try:
            self.keypad.release(key)
        except Chip8Fault as exc:
            self._halt(exc)
            raise

    # ==================== TIMER OPERATIONS ====================

    def update_timers(self):
        """Count both timers down by one (call once per frame)"""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
