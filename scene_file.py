import math
from dataclasses import dataclass, replace

import numpy as np

"""
Reader for the JSON-like scene description format:

    [
      {"type": "camera", "width": 0.5, "height": 0.5},
      {"type": "sphere", "color": [1, 0, 0], "position": [0, 2, 5], "radius": 2}
    ]

The reader only knows about the syntax. What the keys mean is checked by scene.py.
"""

MAX_STRING_LENGTH = 128

NUMBER_CHARS = "0123456789+-.eE"


@dataclass
class SourceLocation:
    file_name: str = ""
    line_num: int = 0
    col_num: int = 0

    def __str__(self):
        return f"{self.file_name}:{self.line_num}:{self.col_num}"


class GrammarError(Exception):
    """Raised when a scene description cannot be read.

    Parameters:
      location : SourceLocation -- where in the input the problem was found
      message : str -- what went wrong
    """

    def __init__(self, location, message):
        super().__init__(f"{location}: {message}")
        self.location = location
        self.message = message


@dataclass
class Field:
    key: str
    value: object
    location: SourceLocation


@dataclass
class Record:
    fields: list
    location: SourceLocation


class InputStream:

    def __init__(self, stream, file_name=""):
        """Wrap a text stream, keeping track of the current line and column."""
        self.stream = stream
        self.location = SourceLocation(file_name=file_name, line_num=1, col_num=1)
        self.saved_char = ""
        self.saved_location = self.location

    def _update_pos(self, ch):
        if ch == "":
            return
        elif ch == "\n":
            self.location.line_num += 1
            self.location.col_num = 1
        else:
            self.location.col_num += 1

    def read_char(self):
        """Read the next character; the empty string means end of input."""
        if self.saved_char != "":
            ch = self.saved_char
            self.saved_char = ""
        else:
            try:
                ch = self.stream.read(1)
            except UnicodeDecodeError:
                raise GrammarError(replace(self.location), "the file is not valid UTF-8 text") from None

        self.saved_location = replace(self.location)
        self._update_pos(ch)
        return ch

    def unread_char(self, ch):
        """Push one character back, restoring the position it was read at."""
        if self.saved_char != "":
            raise RuntimeError("only one character can be pushed back")
        self.saved_char = ch
        self.location = self.saved_location

    def next_char(self):
        """Like read_char, but running out of input is an error."""
        ch = self.read_char()
        if ch == "":
            raise GrammarError(self.saved_location, "unexpected end of file")
        return ch

    def skip_whitespace(self):
        ch = self.read_char()
        while ch.isspace():
            ch = self.read_char()
        self.unread_char(ch)

    def expect(self, expected):
        """Read one character and check that it is `expected`."""
        ch = self.next_char()
        if ch != expected:
            raise GrammarError(self.saved_location, f"expected '{expected}', got '{ch}'")

    def read_string(self):
        """Read a double-quoted string without escape sequences."""
        ch = self.next_char()
        if ch != '"':
            raise GrammarError(self.saved_location, "expected string")

        chars = []
        while True:
            ch = self.next_char()
            if ch == '"':
                break
            if ch == "\\":
                raise GrammarError(self.saved_location, "strings with escape codes are not supported")
            if ord(ch) < 32 or ord(ch) > 126:
                raise GrammarError(self.saved_location, "strings may contain only ascii characters")
            if len(chars) >= MAX_STRING_LENGTH:
                raise GrammarError(
                    self.saved_location,
                    f"strings longer than {MAX_STRING_LENGTH} characters are not supported",
                )
            chars.append(ch)
        return "".join(chars)

    def read_number(self):
        """Read a numeric literal and return it as a float."""
        self.skip_whitespace()
        start = replace(self.location)
        chars = []
        while True:
            ch = self.read_char()
            if ch == "" or ch not in NUMBER_CHARS:
                self.unread_char(ch)
                break
            chars.append(ch)

        token = "".join(chars)
        try:
            value = float(token)
        except ValueError:
            raise GrammarError(start, f"'{token}' is not a valid number") from None
        if not math.isfinite(value):
            raise GrammarError(start, f"'{token}' is out of range")
        return value

    def read_vector(self):
        """Read a three element vector, e.g. [1, 0.5, -2]."""
        self.skip_whitespace()
        self.expect("[")
        values = []
        for i in range(3):
            if i > 0:
                self.skip_whitespace()
                self.expect(",")
            values.append(self.read_number())
        self.skip_whitespace()
        self.expect("]")
        return np.array(values, dtype=np.float64)

    def read_value(self):
        """Read a string, a vector or a number, depending on the next character."""
        self.skip_whitespace()
        ch = self.next_char()
        self.unread_char(ch)
        if ch == '"':
            return self.read_string()
        elif ch == "[":
            return self.read_vector()
        else:
            return self.read_number()


def _read_record(input_file):
    """Read one {...} record; the opening brace has already been consumed."""
    location = replace(input_file.saved_location)
    fields = []
    input_file.skip_whitespace()
    while True:
        field_location = replace(input_file.location)
        key = input_file.read_string()
        input_file.skip_whitespace()
        input_file.expect(":")
        value = input_file.read_value()
        fields.append(Field(key=key, value=value, location=field_location))

        input_file.skip_whitespace()
        ch = input_file.next_char()
        if ch == "}":
            return Record(fields=fields, location=location)
        elif ch == ",":
            input_file.skip_whitespace()
        else:
            raise GrammarError(input_file.saved_location, f"unexpected '{ch}', expected ',' or '}}'")


def read_records(input_file):
    """Yield every record of a scene description, in file order.

    Parameters:
      input_file : InputStream -- the scene text
    Return:
      iterator of Record
    """
    input_file.skip_whitespace()
    input_file.expect("[")
    input_file.skip_whitespace()

    ch = input_file.next_char()
    if ch == "]":
        return

    while True:
        if ch != "{":
            raise GrammarError(input_file.saved_location, f"unexpected '{ch}', expected '{{'")
        yield _read_record(input_file)

        input_file.skip_whitespace()
        ch = input_file.next_char()
        if ch == "]":
            return
        elif ch != ",":
            raise GrammarError(input_file.saved_location, f"unexpected '{ch}', expected ',' or ']'")
        input_file.skip_whitespace()
        ch = input_file.next_char()
