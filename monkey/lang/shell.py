"""Interactive Monkey prompt built on cmd.Cmd. Every line that is not a shell command is Monkey source."""

import cmd
import getpass
import logging


logger = logging.getLogger("monkey.shell")
logger.addHandler(logging.NullHandler())


class Shell(cmd.Cmd):
    """Monkey read-eval-print loop."""
    intro_template = "Hello {}! This is the Monkey programming language!\nFeel free to type in commands"
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.intro = Shell.intro_template.format(Shell.username())

        self._tmp_line = ""
        self.line_num = 0

    @staticmethod
    def username():
        """Name of the current user, for the greeting."""
        try:
            return getpass.getuser()
        except (KeyError, OSError):  # no login name in the environment or password database
            return "there"

    def default(self, line):
        """Runs a line of Monkey, or holds it back while brackets are still open."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if self._tmp_line:
                line = self._tmp_line + "\n" + line
            line, add_to_prev = self.sess.preprocess_line(line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if self.sess.add(line, self.line_num):
                self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Prints a short tour of Monkey instead of the list of shell commands cmd.Cmd would show."""
        print("Welcome to the Monkey interpreter!\n\n"
              "Monkey is a small expression-oriented language with integers, booleans, strings, \n"
              "arrays, hashes and first-class functions. Bindings made with 'let' last for the \n"
              "whole session.\n\n"
              "Try it out by typing 'let add = fn(x, y) { x + y };'. This will bind a function to \n"
              "the name 'add'. Next, try typing 'add(1, 2)', giving '3' as the result. Built-in \n"
              "functions: len, first, last, rest, push, puts.")

    def emptyline(self):
        """A blank line is a no-op; cmd.Cmd would otherwise re-run the last Monkey line."""
        return ""

    def do_EOF(self, arg):
        """Ctrl-D: moves past the prompt line, then leaves like `exit`."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Leaves the shell. Bindings are discarded with the session."""
        if arg:
            self.sess.error_handler.warn("'exit' takes no arguments, got '{}'", arg)
            return False
        logger.debug("leaving shell after %d line(s)", self.line_num)
        return True
