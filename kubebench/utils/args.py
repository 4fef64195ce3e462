"""Split a free-form command line string into an argument vector.

Quoting is shell-lite: single and double quotes group whitespace into one
argument and are stripped, but there is no escaping, globbing or variable
expansion. A quote without a closing partner is kept as a literal
character instead of raising.
"""

_QUOTES = ("'", '"')


def tokenize(raw: str | None) -> list[str]:
    """Tokenize a command line string.

    Example:
        >>> tokenize('--name "hello world" --size=1G')
        ['--name', 'hello world', '--size=1G']
    """
    if not raw:
        return []

    tokens: list[str] = []
    current: list[str] = []
    in_token = False
    i = 0
    n = len(raw)

    while i < n:
        char = raw[i]
        if char.isspace():
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
            i += 1
            continue

        if char in _QUOTES:
            end = raw.find(char, i + 1)
            if end != -1:
                current.append(raw[i + 1 : end])
                in_token = True
                i = end + 1
                continue
            # unmatched, fall through as a literal

        current.append(char)
        in_token = True
        i += 1

    if in_token:
        tokens.append("".join(current))
    return tokens
