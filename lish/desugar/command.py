from lish.reader.expression import Expression, ExpressionKind, Visitor


def classify_head(ex: Expression) -> None:
    """Mark the head of call form `ex` as a command when it is a bare word."""
    first = ex.head()
    if first is not None and first.kind is ExpressionKind.VALUE and first.is_bare_word():
        first.become_command()


class CommandClassifier(Visitor):
    """(ls -la): `ls` stops being a string value and becomes a command reference."""

    def call(self, ex: Expression) -> None:
        classify_head(ex)
