class InsensitiveString(str):
    """
    A str subclass that performs all matching without regard to case,
    while keeping the original spelling for display.

    Attribute types are held as InsensitiveString, so that C{"cn"},
    C{"CN"} and C{"cN"} name the same attribute.
    """

    def _folded(self, other):
        if isinstance(other, str):
            return other.lower()
        return None

    def __eq__(self, other):
        folded = self._folded(other)
        if folded is None:
            return NotImplemented
        return self.lower() == folded

    def __ne__(self, other):
        folded = self._folded(other)
        if folded is None:
            return NotImplemented
        return self.lower() != folded

    def __lt__(self, other):
        folded = self._folded(other)
        if folded is None:
            return NotImplemented
        return self.lower() < folded

    def __le__(self, other):
        folded = self._folded(other)
        if folded is None:
            return NotImplemented
        return self.lower() <= folded

    def __gt__(self, other):
        folded = self._folded(other)
        if folded is None:
            return NotImplemented
        return self.lower() > folded

    def __ge__(self, other):
        folded = self._folded(other)
        if folded is None:
            return NotImplemented
        return self.lower() >= folded

    def __hash__(self):
        return hash(self.lower())

    def __contains__(self, other):
        folded = self._folded(other)
        if folded is None:
            raise TypeError("'in <InsensitiveString>' requires string as left operand")
        return folded in self.lower()

    def __getitem__(self, key):
        return self.__class__(str.__getitem__(self, key))
