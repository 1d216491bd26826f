from abc import ABC, abstractmethod


class Arithmetic(ABC):
    '''
    What a value must support for the machine to compute with it.

    Operations take operands of the implementing type and return a new
    value of that type. Operands are never coerced across types.
    '''
    __slots__ = ()

    @abstractmethod
    def add(self, other):
        pass

    @abstractmethod
    def sub(self, other):
        pass

    @abstractmethod
    def mul(self, other):
        pass

    @abstractmethod
    def div(self, other):
        pass

    @abstractmethod
    def log10(self):
        pass

    @abstractmethod
    def max(self, other):
        pass
