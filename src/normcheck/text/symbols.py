"""
Punctuation and number symbols recognized by the validators.

The values are fixed to the en-US conventions; grouping, decimal and currency
symbols are *not* taken from the process locale so results are reproducible.
"""

DASH = "-"
DOT = "."
SPACE = " "
UNDERSCORE = "_"
VIRGULE = "/"
PAREN_OPEN = "("
PAREN_CLOSE = ")"
AT = "@"

GROUPING = ","
DECIMAL = "."
MINUS = "-"
PLUS = "+"
PERCENT = "%"
EXPONENT = "E"
CURRENCY_DEFAULT = "$"

# Cosmetic characters tolerated inside numbers (space stands for any whitespace).
NUMBER_EXTRAS = GROUPING + SPACE + UNDERSCORE

# Cosmetic characters tolerated inside SSNs, ISBNs and card numbers.
DIGIT_GROUP_EXTRAS = DASH + SPACE
