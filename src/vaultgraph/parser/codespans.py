from __future__ import annotations


def mask_inline_code(text: str) -> str:
    """Blank out inline code spans, keeping every character offset intact.

    A span opens with a run of N backticks and closes at the next run of
    exactly N backticks. Runs without a matching close stay literal. Spans
    may cross line breaks; newlines are kept so the result splits into the
    same lines as ``text``.
    """
    chars = list(text)
    n = len(chars)
    i = 0
    while i < n:
        if chars[i] != "`":
            i += 1
            continue

        start = i
        while i < n and chars[i] == "`":
            i += 1
        open_len = i - start

        j = i
        while j < n:
            if chars[j] != "`":
                j += 1
                continue
            run_start = j
            while j < n and chars[j] == "`":
                j += 1
            if j - run_start == open_len:
                for k in range(start, j):
                    if chars[k] != "\n":
                        chars[k] = " "
                i = j
                break
    return "".join(chars)
