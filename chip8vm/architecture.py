import logging
from random import randint
from time import perf_counter

from chip8vm.decoder import DECODE
from chip8vm.exceptions import ExecutionFault, ProgramCounterException
from chip8vm.framebuffer import Framebuffer
from chip8vm.keyboard import Keypad
from chip8vm.memory import Memory
from chip8vm.rom import VALIDATE_ROM
from chip8vm.stack import Stack
from chip8vm.timers import Timer

logger = logging.getLogger(__name__)


def RANDOM_BYTE():
    return randint(0, 255)


class Architecture:
    # Constants:
    PROGRAM_COUNTER_START = Memory.PROGRAM_START
    FLAG_REGISTER = 0xF

    # A fetch needs PC and PC + 1, anything from here on runs off the end of memory
    MAX_PROGRAM_COUNTER = Memory.MAX_MEMORY - 2

    # Interpreter states
    RUNNING = 'running'
    AWAITING_KEY = 'awaiting_key'
    HALTED = 'halted'

    def __init__(self, rom=b'', keypad=None, screen=None, random_byte=RANDOM_BYTE, clock=perf_counter,
                 shift_quirk=False, load_store_quirk=False):
        """
        rom          - program bytes, copied to 0x200 (at most 3584 bytes)
        keypad       - input source, anything with IS_KEY_PRESSED(key) and POLL_NEXT_KEY()
        screen       - presentation sink, anything with PRESENT(framebuffer), or None
        random_byte  - callable returning a random byte for CXNN
        clock        - callable returning seconds, used by the timers
        shift_quirk  - 8XY6 / 8XYE shift VY into VX instead of shifting VX
        load_store_quirk - FX55 / FX65 leave I pointing past the last register
        """

        # Reject bad ROMs before any state exists
        self.rom = VALIDATE_ROM(rom)

        # The CHIP-8 had 4k (4096 bytes) of memory
        self.memory = Memory()

        # The CHIP-8 had a series of registers as follows:
        #
        #   1 x 16-bit index register        (I)
        #   1 x 16-bit program counter       (PC)
        #   1 x 16-bit instruction register  (IR)
        #   1 x 8-bit delay timer            (DT)
        #   1 x 8-bit sound timer            (ST)
        #
        #   16 x 8-bit general registers     (V0 - VF)
        #
        # plus a 16 level stack of return addresses

        self.GeneralRegisters = {
            0x0: 0,
            0x1: 0,
            0x2: 0,
            0x3: 0,
            0x4: 0,
            0x5: 0,
            0x6: 0,
            0x7: 0,
            0x8: 0,
            0x9: 0,
            0xA: 0,
            0xB: 0,
            0xC: 0,
            0xD: 0,
            0xE: 0,
            0xF: 0,
        }

        self.CpuRegisters = {
            'I': 0,
            'PC': 0,
            'IR': 0,
        }

        self.stack = Stack()

        self.Timers = {
            'DT': Timer(clock),
            'ST': Timer(clock),
        }

        self.framebuffer = Framebuffer()

        # Collaborators
        self.keypad = keypad if keypad is not None else Keypad()
        self.screen = screen
        self.random_byte = random_byte

        self.shift_quirk = shift_quirk
        self.load_store_quirk = load_store_quirk

        # Every operation name the decoder can produce maps onto the method running it
        self.ExecuteLookupTable = {
            'SYS': self.SYS,                                # 0NNN - SYS  NNN        (IGNORED)
            'CLEAR': self.CLEAR,                            # 00E0 - CLS
            'RETURN': self.RETURN,                          # 00EE - RTS
            'JMP_ADDR': self.JMP_ADDR,                      # 1NNN - JUMP NNN
            'JMP_SBR': self.JMP_SBR,                        # 2NNN - CALL NNN
            'SKIP_REG_E_VAL': self.SKIP_REG_E_VAL,          # 3SNN - SKE  VS, NN
            'SKIP_REG_NE_VAL': self.SKIP_REG_NE_VAL,        # 4SNN - SKNE VS, NN
            'SKIP_REG_E_REG': self.SKIP_REG_E_REG,          # 5ST0 - SKE  VS, VT
            'LD_VAL_REG': self.LD_VAL_REG,                  # 6SNN - LOAD VS, NN
            'ADD_VAL_REG': self.ADD_VAL_REG,                # 7SNN - ADD  VS, NN
            'LD_REG_REG': self.LD_REG_REG,                  # 8ST0 - LOAD VS, VT
            'OR': self.OR,                                  # 8ST1 - OR   VS, VT
            'AND': self.AND,                                # 8ST2 - AND  VS, VT
            'XOR': self.XOR,                                # 8ST3 - XOR  VS, VT
            'ADD_REG_REG': self.ADD_REG_REG,                # 8ST4 - ADD  VS, VT
            'SUB_REG_REG': self.SUB_REG_REG,                # 8ST5 - SUB  VS, VT
            'R_SHFT_REG': self.R_SHFT_REG,                  # 8SN6 - SHR  VS
            'SUBN_REG_REG': self.SUBN_REG_REG,              # 8ST7 - SUBN VS, VT
            'L_SHFT_REG': self.L_SHFT_REG,                  # 8SNE - SHL  VS
            'SKIP_REG_NE_REG': self.SKIP_REG_NE_REG,        # 9ST0 - SKNE VS, VT
            'LD_I_VAL': self.LD_I_VAL,                      # ANNN - LOAD I, NNN
            'JMP_V0_VAL': self.JMP_V0_VAL,                  # BNNN - JUMP [V0] + NNN
            'RND_REG': self.RND_REG,                        # CTNN - RAND VT, NN
            'DRAW': self.DRAW,                              # DSTN - DRAW VS, VT, N
            'SKIP_KEY_PRESSED': self.SKIP_KEY_PRESSED,      # ES9E - SKPR VS
            'SKIP_KEY_NOT_PRESSED': self.SKIP_KEY_NOT_PRESSED,  # ESA1 - SKUP VS
            'LD_DT_REG': self.LD_DT_REG,                    # FT07 - LOAD VT, DT
            'WAIT_KEYPRESS': self.WAIT_KEYPRESS,            # FT0A - KEYD VT
            'LD_REG_DT': self.LD_REG_DT,                    # FS15 - LOAD DT, VS
            'LD_REG_ST': self.LD_REG_ST,                    # FS18 - LOAD ST, VS
            'ADD_REG_I': self.ADD_REG_I,                    # FS1E - ADD  I, VS
            'LD_I_REG': self.LD_I_REG,                      # FS29 - LOAD I, VS
            'STR_BCD_MEM': self.STR_BCD_MEM,                # FS33 - BCD
            'STR_REG_MEM': self.STR_REG_MEM,                # FS55 - STOR [I], VS
            'LD_REG_MEM': self.LD_REG_MEM,                  # FS65 - LOAD VS, [I]
        }

        # The instruction currently being executed
        self.CurrentInstruction = None

        # Register FX0A stores the key into while AWAITING_KEY
        self.waiting_register = None

        self.STATE = self.RUNNING

        # Reset memory, registers and screen
        self.RESET()

    def RESET(self):
        """
        Put the machine back in its power on state with the ROM loaded at 0x200
        """
        self.memory.RESET()
        self.memory.LOAD(self.rom, self.PROGRAM_COUNTER_START)

        for i in range(16):
            self.GeneralRegisters[i] = 0

        self.CpuRegisters['PC'] = self.PROGRAM_COUNTER_START
        self.CpuRegisters['I'] = 0
        self.CpuRegisters['IR'] = 0

        self.stack.RESET()

        for timer in self.Timers.values():
            timer.RESET()

        self.framebuffer.CLEAR()

        self.CurrentInstruction = None
        self.waiting_register = None
        self.STATE = self.RUNNING

        logger.info('Machine reset with a %d byte ROM', len(self.rom))

    def STEP(self):
        """
        Run one fetch, decode, execute cycle and return the state the
        interpreter is left in.

        While AWAITING_KEY no instruction runs, the keypad is polled instead.
        An ExecutionFault halts the interpreter and is re-raised for the
        driving loop to deal with.
        """
        if self.STATE == self.HALTED:
            return self.STATE

        if self.STATE == self.AWAITING_KEY:
            self.CHECK_KEYPRESS()
            return self.STATE

        pc = self.CpuRegisters['PC']

        # Nothing was fetched if FETCH itself faults, so there is no operand to report
        try:
            operand = self.FETCH()
        except ExecutionFault as fault:
            self.STATE = self.HALTED
            fault.pc = pc
            raise

        try:
            self.EXECUTE(operand)
        except ExecutionFault as fault:
            self.STATE = self.HALTED
            fault.pc = pc
            fault.operand = operand
            raise

        return self.STATE

    def FETCH(self):
        """
        Load the opcode at [PC] into IR and move PC on to the next instruction
        """
        pc = self.CpuRegisters['PC']

        if pc >= self.MAX_PROGRAM_COUNTER:
            raise ProgramCounterException('Program counter ran past the end of memory')

        # Getting the byte at index [PC]
        # Shifting it 8 bits to the left to make it most significant
        # Adding the next byte to it for subinstructions
        self.CpuRegisters['IR'] = (self.memory.READ(pc) << 8) | self.memory.READ(pc + 1)
        self.CpuRegisters['PC'] = (pc + 2) & 0xFFFF

        return self.CpuRegisters['IR']

    def EXECUTE(self, OPERAND):
        """
        Decode OPERAND and run it. Returns the decoded Instruction.
        """
        instruction = DECODE(OPERAND)
        self.CurrentInstruction = instruction

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('PC=%#06x I=%#06x %s', self.CpuRegisters['PC'], self.CpuRegisters['I'], instruction)

        # Run the correct operation
        self.ExecuteLookupTable[instruction.operation](instruction)

        return instruction

    def SKIP(self):
        self.CpuRegisters['PC'] = (self.CpuRegisters['PC'] + 2) & 0xFFFF

    def PRESENT(self):
        """
        Hand the framebuffer to the screen, if there is one
        """
        if self.screen is not None:
            self.screen.PRESENT(self.framebuffer)

    def SYS(self, instruction):
        """
        0NNN used to jump to a machine code routine on the original hardware.
        It, and every other opcode we do not know, does nothing.
        """
        logger.debug('Ignoring unknown opcode %#06x', instruction.operand)

    def CLEAR(self, instruction):
        """
        Triggered by 00E0 = CLEAR THE SCREEN
        """
        self.framebuffer.CLEAR()
        self.PRESENT()

    def RETURN(self, instruction):
        """
        Called by 00EE instruction

        Return from subroutine. Pop the return address off of the stack,
        and set the program counter to the value popped.
        """
        self.CpuRegisters['PC'] = self.stack.POP()

    def JMP_ADDR(self, instruction):
        """
        Jump instruction to address

        0x1NNN = JUMP TO NNN
        """
        self.CpuRegisters['PC'] = instruction.nnn

    def JMP_SBR(self, instruction):
        """
        Jump instruction to subroutine. Save the current program counter on the stack,
        then jump to the last 3 nibbles of the operand

        0x2NNN - CALL NNN Subroutine
        """
        self.stack.PUSH(self.CpuRegisters['PC'])
        self.CpuRegisters['PC'] = instruction.nnn

    def SKIP_REG_E_VAL(self, instruction):
        """
        Triggered by 0x3SNN = SKIP IF REGISTER VS == NN
        """
        if self.GeneralRegisters[instruction.x] == instruction.nn:
            self.SKIP()

    def SKIP_REG_NE_VAL(self, instruction):
        """
        Triggered by 0x4SNN = SKIP IF REGISTER VS != NN
        """
        if self.GeneralRegisters[instruction.x] != instruction.nn:
            self.SKIP()

    def SKIP_REG_E_REG(self, instruction):
        """
        Triggered by 0x5ST0 = SKIP IF REGISTER VS == VT
        """
        if self.GeneralRegisters[instruction.x] == self.GeneralRegisters[instruction.y]:
            self.SKIP()

    def SKIP_REG_NE_REG(self, instruction):
        """
        Triggered by 0x9ST0 = SKIP IF REGISTER VS != VT
        """
        if self.GeneralRegisters[instruction.x] != self.GeneralRegisters[instruction.y]:
            self.SKIP()

    def LD_VAL_REG(self, instruction):
        """
        Triggered by 0x6SNN = LOAD NN into VS
        """
        self.GeneralRegisters[instruction.x] = instruction.nn

    def ADD_VAL_REG(self, instruction):
        """
        Triggered by 0x7SNN = VS = [VS] + NN
        Wraps around on overflow, VF is left alone
        """
        self.GeneralRegisters[instruction.x] = (self.GeneralRegisters[instruction.x] + instruction.nn) & 0xFF

    def LD_REG_REG(self, instruction):
        """
        PART OF ELI: Triggered by 0x8ST0 = VS = [VT]
        """
        self.GeneralRegisters[instruction.x] = self.GeneralRegisters[instruction.y]

    def OR(self, instruction):
        """
        PART OF ELI: Triggered by 0x8ST1 = VS = VS | VT
        """
        self.GeneralRegisters[instruction.x] |= self.GeneralRegisters[instruction.y]

    def AND(self, instruction):
        """
        PART OF ELI: Triggered by 0x8ST2 = VS = VS & VT
        """
        self.GeneralRegisters[instruction.x] &= self.GeneralRegisters[instruction.y]

    def XOR(self, instruction):
        """
        PART OF ELI: Triggered by 0x8ST3 = VS = VS ^ VT
        """
        self.GeneralRegisters[instruction.x] ^= self.GeneralRegisters[instruction.y]

    def ADD_REG_REG(self, instruction):
        """
        PART OF ELI: Triggered by 0x8ST4 = VS = VS + [VT]
        If carry is generated, we need to set the carry flag in VF
        """
        added_value = self.GeneralRegisters[instruction.x] + self.GeneralRegisters[instruction.y]

        self.GeneralRegisters[self.FLAG_REGISTER] = 1 if added_value > 0xFF else 0
        self.GeneralRegisters[instruction.x] = added_value & 0xFF

    def SUB_REG_REG(self, instruction):
        """
        PART OF ELI: Triggered by 0x8ST5 = VS = [VS] - [VT]

        VF is set to 1 when a borrow is not generated (VS >= VT)
        """
        register1 = self.GeneralRegisters[instruction.x]
        register2 = self.GeneralRegisters[instruction.y]

        self.GeneralRegisters[self.FLAG_REGISTER] = 1 if register1 >= register2 else 0
        self.GeneralRegisters[instruction.x] = (register1 - register2) & 0xFF

    def SUBN_REG_REG(self, instruction):
        """
        PART OF ELI: Triggered by 0x8ST7 = VS = [VT] - [VS]

        VF is set to 1 when a borrow is not generated (VT >= VS)
        """
        register1 = self.GeneralRegisters[instruction.x]
        register2 = self.GeneralRegisters[instruction.y]

        self.GeneralRegisters[self.FLAG_REGISTER] = 1 if register2 >= register1 else 0
        self.GeneralRegisters[instruction.x] = (register2 - register1) & 0xFF

    def SHIFT_SOURCE(self, instruction):
        # The COSMAC VIP shifted VT into VS, most later interpreters shift VS in place
        if self.shift_quirk:
            return self.GeneralRegisters[instruction.y]
        return self.GeneralRegisters[instruction.x]

    def R_SHFT_REG(self, instruction):
        """
        PART OF ELI: Triggered by 0x8S06 = VS = VS >> 1 and VF = VS & 0x1 (bit 0 before the shift)
        """
        value = self.SHIFT_SOURCE(instruction)

        self.GeneralRegisters[self.FLAG_REGISTER] = value & 0x1
        self.GeneralRegisters[instruction.x] = value >> 1

    def L_SHFT_REG(self, instruction):
        """
        PART OF ELI: Triggered by 0x8S0E = VS = VS << 1 and VF = (VS & 0x80) >> 7 (bit 7 before the shift)
        """
        value = self.SHIFT_SOURCE(instruction)

        self.GeneralRegisters[self.FLAG_REGISTER] = (value & 0x80) >> 7
        self.GeneralRegisters[instruction.x] = (value << 1) & 0xFF

    def LD_I_VAL(self, instruction):
        """
        Triggered by 0xANNN = LOAD NNN into I
        """
        self.CpuRegisters['I'] = instruction.nnn

    def JMP_V0_VAL(self, instruction):
        """
        Triggered by 0xBNNN = JUMP to [V0] + NNN
        """
        self.CpuRegisters['PC'] = (self.GeneralRegisters[0x0] + instruction.nnn) & 0xFFFF

    def RND_REG(self, instruction):
        """
        Triggered by 0xCSNN = Generate a random number, AND it with NN and save in VS
        Random number must be between 0 and 255
        """
        self.GeneralRegisters[instruction.x] = self.random_byte() & instruction.nn & 0xFF

    def DRAW(self, instruction):
        """
        Triggered by DSTN - DRAW VS, VT, N

        Draws the N byte sprite stored at [I] with its top left corner at
        x = [VS], y = [VT]. See Framebuffer.DRAW_SPRITE for how the pixels
        are XORed in. VF is cleared first and set to 1 if any pixel was
        turned off. A sprite with N = 0 draws nothing.
        """
        x = self.GeneralRegisters[instruction.x]
        y = self.GeneralRegisters[instruction.y]

        self.GeneralRegisters[self.FLAG_REGISTER] = 0

        sprite = self.memory.READ_BLOCK(self.CpuRegisters['I'], instruction.n)

        if self.framebuffer.DRAW_SPRITE(x, y, sprite):
            self.GeneralRegisters[self.FLAG_REGISTER] = 1

        self.PRESENT()

    def SKIP_KEY_PRESSED(self, instruction):
        """
        PART OF KBRD: Triggered by 0xES9E = IF KEY IN VS IS PRESSED, SKIP LINE
        """
        if self.keypad.IS_KEY_PRESSED(self.GeneralRegisters[instruction.x] & 0xF):
            self.SKIP()

    def SKIP_KEY_NOT_PRESSED(self, instruction):
        """
        PART OF KBRD: Triggered by 0xESA1 = IF KEY IN VS NOT PRESSED, SKIP LINE
        """
        if not self.keypad.IS_KEY_PRESSED(self.GeneralRegisters[instruction.x] & 0xF):
            self.SKIP()

    def LD_DT_REG(self, instruction):
        """
        PART OF MSC - Triggered by 0xFS07 = LOAD DT INTO VS
        """
        self.GeneralRegisters[instruction.x] = self.Timers['DT'].READ()

    def WAIT_KEYPRESS(self, instruction):
        """
        PART OF MSC - Triggered by 0xFS0A = WAIT FOR KEYPRESS, STORE KEYPRESS INTO VS

        Nothing blocks here. The interpreter switches to AWAITING_KEY and each
        following STEP() polls the keypad until a new key press shows up.
        """
        # Only presses from now on count
        while self.keypad.POLL_NEXT_KEY() is not None:
            pass

        self.waiting_register = instruction.x
        self.STATE = self.AWAITING_KEY

    def CHECK_KEYPRESS(self):
        """
        Finish an FX0A once the keypad reports a key
        """
        key = self.keypad.POLL_NEXT_KEY()
        if key is None:
            return False

        self.GeneralRegisters[self.waiting_register] = key & 0xF
        self.waiting_register = None
        self.STATE = self.RUNNING
        return True

    def LD_REG_DT(self, instruction):
        """
        PART OF MSC - Triggered by 0xFS15 = LOAD VS INTO DT
        """
        self.Timers['DT'].ARM(self.GeneralRegisters[instruction.x])

    def LD_REG_ST(self, instruction):
        """
        PART OF MSC - Triggered by 0xFS18 = LOAD VS INTO ST
        """
        self.Timers['ST'].ARM(self.GeneralRegisters[instruction.x])

    def ADD_REG_I(self, instruction):
        """
        PART OF MSC - Triggered by 0xFT1E = I = [VT] + [I]
        """
        self.CpuRegisters['I'] = (self.CpuRegisters['I'] + self.GeneralRegisters[instruction.x]) & 0xFFFF

    def LD_I_REG(self, instruction):
        """
        PART OF MSC - Triggered by 0xFS29 = LOAD ADDRESS OF FONT SPRITE VS INTO I
        All font sprites are 5 bytes long, so the location of the sprite is digit * 5
        """
        self.CpuRegisters['I'] = Memory.FONT_ADDRESS(self.GeneralRegisters[instruction.x])

    def STR_BCD_MEM(self, instruction):
        """
        PART OF MSC - Triggered by 0xFT33 = TAKE Value in VT and place as follow into memory:

            N*10^2 = self.memory[i]
            N*10^1 = self.memory[i+1]
            N*10^0 = self.memory[i+2]

        """
        value = self.GeneralRegisters[instruction.x]
        address = self.CpuRegisters['I']

        self.memory.WRITE(address, value // 100)
        self.memory.WRITE(address + 1, (value // 10) % 10)
        self.memory.WRITE(address + 2, value % 10)

    def STR_REG_MEM(self, instruction):
        """
        PART OF MSC - Triggered by 0xFT55 = STORE V0-VT INTO MEMORY AT [I]
        """
        for i in range(instruction.x + 1):
            self.memory.WRITE(self.CpuRegisters['I'] + i, self.GeneralRegisters[i])

        if self.load_store_quirk:
            self.CpuRegisters['I'] = (self.CpuRegisters['I'] + instruction.x + 1) & 0xFFFF

    def LD_REG_MEM(self, instruction):
        """
        PART OF MSC - Triggered by 0xFT65 = LOAD V0-VT FROM MEMORY AT [I]
        """
        for i in range(instruction.x + 1):
            self.GeneralRegisters[i] = self.memory.READ(self.CpuRegisters['I'] + i)

        if self.load_store_quirk:
            self.CpuRegisters['I'] = (self.CpuRegisters['I'] + instruction.x + 1) & 0xFFFF

    def SOUND_ACTIVE(self):
        """
        True while the sound timer is counting down. There is no audio, hosts
        can use this to show a beep indicator.
        """
        return self.Timers['ST'].IS_ACTIVE()

    def IS_HALTED(self):
        return self.STATE == self.HALTED

    def IS_WAITING(self):
        return self.STATE == self.AWAITING_KEY

    # Debug functions
    def DUMP_REGISTERS(self):
        """
        Snapshot of every register, handy for logging and tests
        """
        return {
            'V': [self.GeneralRegisters[i] for i in range(16)],
            'I': self.CpuRegisters['I'],
            'PC': self.CpuRegisters['PC'],
            'IR': self.CpuRegisters['IR'],
            'SP': len(self.stack),
            'DT': self.Timers['DT'].READ(),
            'ST': self.Timers['ST'].READ(),
            'STATE': self.STATE,
        }

    def DUMP_MEMORY(self):
        """
        Log the non zero contents of the memory
        """
        for index, value in enumerate(self.memory.data):
            if value != 0:
                logger.debug('Index: %#05x, value: %#04x', index, value)
