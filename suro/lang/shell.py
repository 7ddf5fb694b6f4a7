"""Handles interactive/command-line mode for the suro interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """suro interpreter shell."""
    intro = "suro interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary suro statement."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                start = self.line_num - line.count("\n")
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                try:
                    self.sess.add(line, start)
                except ValueError:
                    return  # if line is empty, terminate

                self.sess.run()

                result = self.sess.pop() if self.sess.results else None
                if result is not None:
                    print(result)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the suro interpreter!\n\n"
              "suro is a small imperative scripting language. Bind names with 'set x to 1', \n"
              "rebind them with 'change x to 2', group statements in '{ ...; }' blocks and \n"
              "branch with 'if ... then ... else ...'. Call functions with 'print(x)' or \n"
              "'call print with (x)'.\n\n"
              "Try it out by typing 'set x to \"ab\" * 3'. Next, try typing 'x'. This will \n"
              "print 'ababab'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
