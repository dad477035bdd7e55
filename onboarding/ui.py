"""Questionary styling shared by wizard steps."""

from questionary import Style

STYLE = Style(
    [
        ("qmark", "fg:magenta bold"),
        ("question", "bold"),
        ("answer", "fg:green bold"),
        ("pointer", "fg:magenta bold"),
        ("highlighted", "fg:magenta bold"),
        ("selected", "fg:green"),
        ("instruction", "fg:grey italic"),
    ]
)
