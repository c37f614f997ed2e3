from __future__ import annotations

LOGO = r"""                 _   _           _        _ _
 ___ _ __   ___ | |_(_)_ __  ___| |_ __ _| | | ___ _ __
/ __| '_ \ / _ \| __| | '_ \/ __| __/ _` | | |/ _ \ '__|
\__ \ |_) | (_) | |_| | | | \__ \ || (_| | | |  __/ |
|___/ .__/ \___/ \__|_|_| |_|___/\__\__,_|_|_|\___|_|
    |_|
"""


def print_logo() -> None:
    print(LOGO)
