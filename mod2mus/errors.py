'''
Exceptions for the mod2mus library
'''


class Mod2MusException(Exception):
    """
    Generic base class for mod2mus exceptions
    """
    pass


class Mod2MusIOError(Mod2MusException, IOError):
    """
    IO error (input can't be read, output can't be created)
    """
    pass


class Mod2MusValueError(Mod2MusException, ValueError):
    """
    Value error
    """
    pass


class Mod2MusFormatError(Mod2MusValueError):
    """
    Malformed or unsupported input file
    """
    pass


class Mod2MusSignatureError(Mod2MusFormatError):
    """
    MOD signature is not 1CHN, 2CHN, 3CHN or M.K.
    """
    pass


class Mod2MusOrderCountError(Mod2MusFormatError):
    """
    MOD header claims more orders than the order list holds
    """
    pass


class Mod2MusNotImplemented(Mod2MusException):
    """
    Not implemented error
    """
    pass
