from dataclasses import dataclass


@dataclass(frozen=True)
class Instruction:
    """
    A decoded 16-bit opcode: which operation it is plus every operand field.

    For 0xD123 the fields are family=0xD, x=0x1, y=0x2, n=0x3,
    nn=0x23 and nnn=0x123. Handlers only look at the fields they need.
    """
    operand: int
    operation: str
    family: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int

    def __str__(self):
        return '{:04X} {}'.format(self.operand, self.operation)


# Opcodes that do not match anything below decode to SYS. On the original
# hardware 0NNN called a machine code routine, we treat all of them as no-ops.
UNKNOWN = 'SYS'

# The operations are chosen by looking at the most significant nibble
# (the first character after 0x), the other 3 nibbles are the parameters
# of the operation (so 0x1333 = JUMP 333)
OperationLookupTable = {
    0x1: 'JMP_ADDR',                    # 1NNN - JUMP NNN           (JUMP TO ADDRESS)
    0x2: 'JMP_SBR',                     # 2NNN - CALL NNN           (JUMP TO SUBROUTINE)
    0x3: 'SKIP_REG_E_VAL',              # 3SNN - SKE  VS, NN        (SKIP IF VS == NN)
    0x4: 'SKIP_REG_NE_VAL',             # 4SNN - SKNE VS, NN        (SKIP IF VS != NN)
    0x6: 'LD_VAL_REG',                  # 6SNN - LOAD VS, NN        (LOAD NN INTO VS)
    0x7: 'ADD_VAL_REG',                 # 7SNN - ADD  VS, NN        (ADD NN TO VS)
    0xA: 'LD_I_VAL',                    # ANNN - LOAD I, NNN        (LOAD NNN INTO I)
    0xB: 'JMP_V0_VAL',                  # BNNN - JUMP [V0] + NNN    (JUMP TO V0 + NNN)
    0xC: 'RND_REG',                     # CTNN - RAND VT, NN        (LOAD RANDOM NUMBER INTO VT AFTER AND WITH NN)
    0xD: 'DRAW',                        # DSTN - DRAW VS, VT, N     (DRAW SPRITE AT I, N ROWS TALL, AT VS, VT)
}

# 0x00NN, matched on the whole low byte
SYSLookup = {
    0xE0: 'CLEAR',                      # 00E0 - CLS                (CLEAR THE DISPLAY)
    0xEE: 'RETURN',                     # 00EE - RTS                (RETURN FROM SUBROUTINE)
}

# 0x5ST0 and 0x9ST0 only exist with a zero low nibble
REGCompareLookup = {
    0x5: 'SKIP_REG_E_REG',              # 5ST0 - SKE  VS, VT        (SKIP IF VS == VT)
    0x9: 'SKIP_REG_NE_REG',             # 9ST0 - SKNE VS, VT        (SKIP IF VS != VT)
}

# 0x8STN, the last nibble defines the logical instruction
ELILookup = {
    0x0: 'LD_REG_REG',                  # 8ST0 - LOAD VS, VT        (LOAD VT INTO VS)
    0x1: 'OR',                          # 8ST1 - OR   VS, VT        (LOGICAL 'OR' OF VS AND VT)
    0x2: 'AND',                         # 8ST2 - AND  VS, VT        (LOGICAL 'AND' OF VS AND VT)
    0x3: 'XOR',                         # 8ST3 - XOR  VS, VT        (LOGICAL 'XOR' OF VS AND VT)
    0x4: 'ADD_REG_REG',                 # 8ST4 - ADD  VS, VT        (ADD VT TO VS, VF = CARRY)
    0x5: 'SUB_REG_REG',                 # 8ST5 - SUB  VS, VT        (VS = VS - VT, VF = NOT BORROW)
    0x6: 'R_SHFT_REG',                  # 8SN6 - SHR  VS            (RIGHT SHIFT VS)
    0x7: 'SUBN_REG_REG',                # 8ST7 - SUBN VS, VT        (VS = VT - VS, VF = NOT BORROW)
    0xE: 'L_SHFT_REG',                  # 8SNE - SHL  VS            ( LEFT SHIFT VS)
}

# 0xESNN, the last byte defines the keyboard routine
KBRDLookup = {
    0x9E: 'SKIP_KEY_PRESSED',           # ES9E - SKPR VS            (IF KEY IN VS IS PRESSED, SKIP LINE)
    0xA1: 'SKIP_KEY_NOT_PRESSED',       # ESA1 - SKUP VS            (IF KEY IN VS NOT PRESSED, SKIP LINE)
}

# 0xFSNN, the last byte defines the miscellaneous routine
MSCLookup = {
    0x07: 'LD_DT_REG',                  # FT07 - LOAD VT, DT        (LOAD DT INTO VT)
    0x0A: 'WAIT_KEYPRESS',              # FT0A - KEYD VT            (WAIT FOR KEYPRESS, LOAD INTO VT)
    0x15: 'LD_REG_DT',                  # FS15 - LOAD DT, VS        (LOAD VS INTO DT)
    0x18: 'LD_REG_ST',                  # FS18 - LOAD ST, VS        (LOAD VS INTO ST)
    0x1E: 'ADD_REG_I',                  # FS1E - ADD  I, VS         (ADD VS TO I)
    0x29: 'LD_I_REG',                   # FS29 - LOAD I, VS         (LOAD ADDRESS OF FONT SPRITE VS INTO I)
    0x33: 'STR_BCD_MEM',                # FS33 - BCD                (STORE BINARY CODED DECIMAL IN VS INTO MEMORY)
    0x55: 'STR_REG_MEM',                # FS55 - STOR [I], VS       (STORE V0 to VS INTO MEMORY[I])
    0x65: 'LD_REG_MEM',                 # FS65 - LOAD VS, [I]       (LOAD V0 to VS FROM MEMORY[I])
}


def CLASSIFY(operand):
    """
    Work out the operation name for a 16-bit opcode
    """
    family = (operand & 0xF000) >> 12

    if family == 0x0:
        if operand & 0x0F00:
            return UNKNOWN
        return SYSLookup.get(operand & 0x00FF, UNKNOWN)

    if family in REGCompareLookup:
        if operand & 0x000F:
            return UNKNOWN
        return REGCompareLookup[family]

    if family == 0x8:
        return ELILookup.get(operand & 0x000F, UNKNOWN)

    if family == 0xE:
        return KBRDLookup.get(operand & 0x00FF, UNKNOWN)

    if family == 0xF:
        return MSCLookup.get(operand & 0x00FF, UNKNOWN)

    return OperationLookupTable[family]


def DECODE(operand):
    """
    Decode a 16-bit opcode into an Instruction
    """
    operand &= 0xFFFF

    return Instruction(
        operand=operand,
        operation=CLASSIFY(operand),
        family=(operand & 0xF000) >> 12,
        x=(operand & 0x0F00) >> 8,
        y=(operand & 0x00F0) >> 4,
        n=operand & 0x000F,
        nn=operand & 0x00FF,
        nnn=operand & 0x0FFF,
    )
