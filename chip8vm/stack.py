from chip8vm.exceptions import StackOverflowException, StackUnderflowException


class Stack:
    """
    Return address stack used by 2NNN (CALL) and 00EE (RETURN).

    The stack pointer starts below element 0, so an empty stack has
    pointer -1 and a full one has pointer DEPTH - 1.
    """

    DEPTH = 16
    EMPTY = -1

    def __init__(self, depth=DEPTH):
        self.depth = depth
        self.addresses = [0] * depth
        self.pointer = self.EMPTY

    def PUSH(self, address):
        if self.pointer + 1 >= self.depth:
            raise StackOverflowException('Call stack overflow, more than {} nested calls'.format(self.depth))

        self.pointer += 1
        self.addresses[self.pointer] = address & 0xFFFF

    def POP(self):
        if self.pointer == self.EMPTY:
            raise StackUnderflowException('Return with an empty call stack')

        address = self.addresses[self.pointer]
        self.pointer -= 1
        return address

    def PEEK(self):
        if self.pointer == self.EMPTY:
            return None
        return self.addresses[self.pointer]

    def RESET(self):
        self.addresses = [0] * self.depth
        self.pointer = self.EMPTY

    def __len__(self):
        return self.pointer + 1
