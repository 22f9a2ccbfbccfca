from rich.pretty import pprint

from parley import *

shell = Shell("demo", "A demo of the parley shell. Enter exit, help, or sample.")


@shell.verb
class Sample(Verb):
    """
    sample verb: -s/--switch toggles, -t/--text sets a text, -n/--num sets a number.
    """

    def __init__(self):
        super().__init__()
        self.switch = False
        self.text = None
        self.num = 0
        self.bind("s", self.toggle, "switch")
        self.bind("t", self.write, "text")
        self.bind("n", self.count, "num")

    def toggle(self, value):
        self.switch = not self.switch

    def write(self, value):
        self.text = value

    def count(self, value):
        self.num = integer(value)

    def __call__(self):
        return "Switch on? %s\nText entered: %s\nNumber entered: %d + 10 = %d" % (
            self.switch, self.text, self.num, self.num + 10
        )


if __name__ == '__main__':
    pprint(shell)
    shell.run()
