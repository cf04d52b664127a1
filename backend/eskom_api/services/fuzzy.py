"""Skim-style fuzzy subsequence scoring.

A pattern matches a choice when its characters appear in the choice in
order. The score rewards matches at the start of words and runs of
consecutive matches, and penalizes the gaps between matched characters.
Scoring follows the fzf v2 / skim v2 dynamic programme.
"""

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

# Character classes, ordered so that everything above _NON_WORD is a word char
_WHITE, _NON_WORD, _LOWER, _UPPER, _NUMBER = range(5)


def _char_class(c: str) -> int:
    if c.islower():
        return _LOWER
    if c.isupper():
        return _UPPER
    if c.isdigit():
        return _NUMBER
    if c.isspace():
        return _WHITE
    return _NON_WORD


def _bonus(prev_class: int, cls: int) -> int:
    if cls > _NON_WORD:
        if prev_class <= _NON_WORD:
            return BONUS_BOUNDARY
        if (prev_class == _LOWER and cls == _UPPER) or (
            prev_class != _NUMBER and cls == _NUMBER
        ):
            return BONUS_CAMEL123
        return 0
    return BONUS_NON_WORD


def _bonuses(choice: str) -> list[int]:
    result = []
    prev = _WHITE
    for c in choice:
        cls = _char_class(c)
        result.append(_bonus(prev, cls))
        prev = cls
    return result


def _is_subsequence(pattern: str, text: str) -> bool:
    it = iter(text)
    return all(c in it for c in pattern)


def fuzzy_score(choice: str, pattern: str) -> int | None:
    """Score ``pattern`` against ``choice``; ``None`` when it does not match.

    Matching is case-insensitive. An empty pattern matches everything with a
    score of 0.
    """
    if not pattern:
        return 0

    text = choice.lower()
    pat = pattern.lower()
    if not _is_subsequence(pat, text):
        return None

    # lower() can change the length of some non-ASCII strings
    bonuses = _bonuses(choice if len(choice) == len(text) else text)
    m = len(text)

    # prev_h[j]: best score for pat[:i] within text[:j + 1], None when impossible
    # prev_c[j]: length of the consecutive run ending at j for that best score
    prev_h: list[int | None] = [None] * m
    prev_c: list[int] = [0] * m

    for i, pc in enumerate(pat):
        row_h: list[int | None] = [None] * m
        row_c: list[int] = [0] * m
        in_gap = False
        for j in range(m):
            gap_score = None
            if j > 0 and row_h[j - 1] is not None:
                penalty = SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
                gap_score = row_h[j - 1] + penalty

            match_score = None
            consecutive = 0
            if text[j] == pc:
                b = bonuses[j]
                if i == 0:
                    match_score = SCORE_MATCH + b * BONUS_FIRST_CHAR_MULTIPLIER
                    consecutive = 1
                elif j > 0 and prev_h[j - 1] is not None:
                    consecutive = prev_c[j - 1] + 1
                    if consecutive > 1:
                        first_bonus = bonuses[j - consecutive + 1]
                        if b >= BONUS_BOUNDARY and b > first_bonus:
                            consecutive = 1
                        else:
                            b = max(b, BONUS_CONSECUTIVE, first_bonus)
                    match_score = prev_h[j - 1] + SCORE_MATCH + b

            if match_score is not None and (gap_score is None or match_score >= gap_score):
                row_h[j] = match_score
                row_c[j] = consecutive
                in_gap = False
            elif gap_score is not None:
                row_h[j] = gap_score
                in_gap = True

        prev_h, prev_c = row_h, row_c

    scores = [s for s in prev_h if s is not None]
    return max(scores) if scores else None
