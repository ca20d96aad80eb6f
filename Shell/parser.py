import shlex

from Shell.command import PIPE, ComplexCommand, SimpleCommand
from Shell.exceptions import ParseError

REDIRECTS = {
    "<": "infile",
    ">": "outfile",
    "2>": "errfile",
}

QUOTING_CHARS = "'\"\\"


class QuotedWord(str):
    """A token that was quoted or escaped on the command line, never an operator."""


def is_operator(tok, operators):
    return tok in operators and not isinstance(tok, QuotedWord)


def is_pipe(tok):
    return is_operator(tok, (PIPE,))


def tokenize(line):
    """
    Split a command line into words.
    Operators (|, <, >, 2>) must be separated by whitespace; a quoted
    operator ('|', "<") is an ordinary word.
    """
    lex = shlex.shlex(line, posix=True)
    lex.whitespace_split = True
    lex.commenters = ""
    tokens, start = [], 0
    try:
        for tok in lex:
            # raw text consumed for this token, quotes still in place
            end = lex.instream.tell()
            if any(c in line[start:end] for c in QUOTING_CHARS):
                tok = QuotedWord(tok)
            tokens.append(tok)
            start = end
    except ValueError as e:
        raise ParseError(f"syntax error: {e}")
    return tokens


def build_simple_command(tokens):
    """
    Parse redirections out of one pipe stage.
    Returns: SimpleCommand
    """
    words, targets = [], {}
    i = 0

    while i < len(tokens):
        tok = tokens[i]
        if is_operator(tok, REDIRECTS):
            if i + 1 >= len(tokens) or is_operator(tokens[i + 1], REDIRECTS) or is_pipe(tokens[i + 1]):
                raise ParseError(f"syntax error: expected file name after '{tok}'")
            targets[REDIRECTS[tok]] = str(tokens[i + 1])
            i += 2
        else:
            words.append(str(tok))
            i += 1

    if not words:
        raise ParseError("syntax error: missing command")

    return SimpleCommand(words, **targets)


def construct_command(tokens):
    """
    Build a command tree from tokens.
    a | b | c  ->  a | (b | c)
    """
    if not tokens:
        raise ParseError("syntax error: missing command")

    idx = next((i for i, tok in enumerate(tokens) if is_pipe(tok)), None)
    if idx is None:
        return build_simple_command(tokens)

    left, right = tokens[:idx], tokens[idx + 1:]
    if not left or not right:
        raise ParseError(f"syntax error near unexpected token '{PIPE}'")

    return ComplexCommand(PIPE, build_simple_command(left), construct_command(right))


def parse_line(line):
    """
    Parse a whole input line.
    Returns: command tree, or None for a blank line
    """
    line = line.strip()
    if not line:
        return None

    tokens = tokenize(line)
    if not tokens:
        return None
    return construct_command(tokens)
