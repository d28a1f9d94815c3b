from statecomb.Char import char, uint
from statecomb.Combinators import many, many_join
from statecomb.Prim import run_parser


class TimeMany:
    def setup(self):
        self.parser = many(char("a"))
        self.small = "a" * 1000
        self.medium = "a" * 10000
        self.large = "a" * 100000

    def time_many_small(self):
        run_parser(self.parser, self.small)

    def time_many_medium(self):
        run_parser(self.parser, self.medium)

    def time_many_large(self):
        run_parser(self.parser, self.large)


class TimeManyJoin:
    def setup(self):
        self.parser = many_join(uint(), char(","))
        self.numbers = ",".join(str(i) for i in range(10000))

    def time_many_join(self):
        run_parser(self.parser, self.numbers)
