from mod2mus.errors import *


class Mod2MusBase:
    @classmethod
    def cts_type(cls):
        return 'Mod2MusBase'

    def __init__(self):
        self._options = {}

    def get_option(self, arg, default=None):
        """
        Get an option

        :param arg: option name
        :type arg: str
        :param default: default value
        :type default: type of option
        :return: value of option
        :rtype: option type
        """
        if arg in self._options:
            return self._options[arg]
        return default

    def get_options(self):
        """
        Get a dictionary of all current options

        :return: options
        :rtype: dict
        """
        return self._options

    def set_options(self, **kwargs):
        """
        Set options.  All option keywords are converted to lowercase.

        :param kwargs: options
        :type kwargs: keyword options
        """
        for op, val in kwargs.items():
            self._options[op.lower()] = val

    def warn(self, message):
        """
        Prints a warning unless the 'verbose' option has been turned off
        """
        if self.get_option('verbose', True):
            print(f"Warning: {message}")


class Mod2MusIO(Mod2MusBase):
    @classmethod
    def cts_type(cls):
        return 'IO'

    def __init__(self):
        Mod2MusBase.__init__(self)

    def to_mod_song(self, filename, **kwargs):
        """
        Imports a file into a ModSong

        :param filename: filename to import
        :type filename: str
        :param kwargs: Keyword options for the particular I/O class
        :return: MOD song
        :rtype: protracker.ModSong
        """
        raise Mod2MusNotImplemented(f"Not implemented")

    def to_bin(self, mod_song, **kwargs):
        """
        Outputs a song into the desired binary format

        :param mod_song: song to export
        :type mod_song: protracker.ModSong
        :param kwargs: Keyword options for the particular I/O class
        :return: binary
        :rtype: bytearray
        """
        raise Mod2MusNotImplemented(f"Not implemented for type {self.cts_type()}")

    def to_file(self, mod_song, filename, **kwargs):
        """
        Writes a song to a file

        :param mod_song: song to export
        :type mod_song: protracker.ModSong
        :param filename: Name of output file
        :type filename: str
        :param kwargs: Keyword options for the particular I/O class
        """
        raise Mod2MusNotImplemented(f"Not implemented for type {self.cts_type()}")
