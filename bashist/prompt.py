"""
Line prompts for interactive scripts.

Prompts are written to stderr so that command substitution,
`answer=$(bashist ask "Name?")`, captures only what the user typed.
"""

from .console import err_console


def ask(prompt: str, default: str | None = None) -> str:
    """Print `prompt` and read one line of input.

    With a `default`, " [<default>]" is appended to the prompt and a blank
    answer returns the default. Raises EOFError when input is exhausted.
    """
    if default:
        prompt += f" [{default}]"
    answer = err_console.input(f"{prompt} ", markup=False, emoji=False)
    if not answer:
        answer = default or ""
    return answer


def confirm(prompt: str) -> bool:
    """Ask until the user agrees ("y", "yes") or refuses ("n", "no")."""
    while True:
        answer = ask(f"{prompt} [y/n]")
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
