"""Session control for the Monkey interpreter, either in command-line mode (one line at a time, from the Shell) or file
interpretation mode (a whole file as one program).

A Session owns a single Environment that lives as long as the session does, so `let` bindings made on one line are
visible on every later line.
"""

import logging

from monkey.core.environment import Environment
from monkey.core.evaluator import evaluate
from monkey.core.lexer import Lexer
from monkey.core.objects import Error
from monkey.core.parser import parse
from monkey.core.token import TokenKind
from monkey.lang.error import EvaluationFailure, GenericException


logger = logging.getLogger("monkey.session")
logger.addHandler(logging.NullHandler())


OPENERS = (TokenKind.LPAREN, TokenKind.LBRACE, TokenKind.LBRACKET)
CLOSERS = (TokenKind.RPAREN, TokenKind.RBRACE, TokenKind.RBRACKET)


class Session:
    """Governs a Monkey session: parses sources into programs, evaluates them against one long-lived Environment,
    and keeps their results.
    """
    SH_FILE = "<in>"  # command-line interpreter filename
    PARSER_ERRORS_HEADER = "Ran into some parser errors\nparser errors:\n"

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()
        self.programs = []  # list of (Program, source, line num) waiting to be run
        self.results = []   # Objects produced by run, latest last

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path)

            logger.debug("loaded %s (%d characters)", path, len(source))
            if not source.strip():
                self.error_handler.warn("'{}' contains no statements", path)
            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Preprocesses a line from the command-line. Returns the line and whether it leaves a (, { or [ open, in
        which case the next line should be appended to it before it is added.
        """
        depth = 0
        for token in Lexer(line):
            if token.kind in OPENERS:
                depth += 1
            elif token.kind in CLOSERS:
                depth -= 1
        return line, depth > 0

    @staticmethod
    def format_parser_errors(errors):
        """Fixed-format report of parser diagnostics, one tab-indented line per diagnostic."""
        return Session.PARSER_ERRORS_HEADER + "".join(f"\t{msg}\n" for msg in errors)

    def _track(self, source, line_num):
        """Registers source in the traceback. Whole files are not echoed back, only command-line input is."""
        if self.cmd_line:
            self.error_handler.register_line(self.path, source.strip(), line_num)

    def add(self, source, line_num):
        """Parses source and queues the resulting program. If the parser reports errors, prints them and skips the
        program (raising in file mode). Returns whether the program was queued.
        """
        self._track(source, line_num)  # in case error is raised

        program, errors = parse(source)
        if errors:
            logger.debug("%s:%d: %d parser error(s)", self.path, line_num, len(errors))
            print(Session.format_parser_errors(errors), end="")
            if not self.cmd_line:
                raise GenericException("'{}' could not be parsed", self.path)
            self.error_handler.remove_line(self.path)
            return False

        self.programs.append((program, source, line_num))
        self.error_handler.remove_line(self.path)  # error was not raised
        return True

    def run(self):
        """Evaluates queued programs in order against this session's Environment. In file mode, a program that
        evaluates to an Error is raised as an EvaluationFailure.
        """
        programs, self.programs = self.programs, []
        for program, source, line_num in programs:
            self._track(source, line_num)

            result = evaluate(program, self.env)
            if isinstance(result, Error):
                logger.debug("%s:%d: %s", self.path, line_num, result.message)
                if not self.cmd_line:
                    raise EvaluationFailure(self.path, result)

            if result is not None:
                self.results.append(result)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Returns the display form of the latest result and removes it."""
        return self.results.pop().inspect()
