import os
import textwrap
from typing import Optional

from ..config.settings import CONFIG_FILENAME
from ..errors import UnsupportedShellError

COMMANDS = ["list", "ls", "ssh", "profile", "completion"]
PROFILE_COMMANDS = ["list", "show", "init", "switch", "fix-perms"]
SHELLS = ["bash", "zsh"]

_BASH_TEMPLATE = textwrap.dedent("""
    # Lanes shell completion
    # Add this to your ~/.bashrc, or run: eval "$(lanes completion bash)"

    _lanes_profiles() {
        local dir="${LANES_CONFIG_DIR:-$HOME/.lanes}"
        local f
        for f in "$dir"/*.yml; do
            [ -e "$f" ] || continue
            f="$(basename "$f" .yml)"
            [ "$f.yml" = "CONFIG_FILENAME" ] && continue
            echo "$f"
        done
    }

    _lanes_completion() {
        local cur prev
        cur="${COMP_WORDS[COMP_CWORD]}"
        prev="${COMP_WORDS[COMP_CWORD-1]}"

        # Complete profile names after options and commands that take one
        case "$prev" in
            -p|--profile|switch|show|fix-perms)
                COMPREPLY=( $(compgen -W "$(_lanes_profiles)" -- "$cur") )
                return 0
                ;;
            profile)
                COMPREPLY=( $(compgen -W "PROFILE_COMMANDS" -- "$cur") )
                return 0
                ;;
            completion)
                COMPREPLY=( $(compgen -W "SHELLS" -- "$cur") )
                return 0
                ;;
        esac

        # Complete subcommands
        if [ "$COMP_CWORD" -eq 1 ] || [[ "${COMP_WORDS[COMP_CWORD-2]}" = -p || "${COMP_WORDS[COMP_CWORD-2]}" = --profile ]]; then
            COMPREPLY=( $(compgen -W "COMMANDS" -- "$cur") )
            return 0
        fi
    }
    complete -F _lanes_completion lanes
    """)

_ZSH_HEADER = textwrap.dedent("""
    #compdef lanes
    # Lanes shell completion for zsh, reusing the bash completion function
    autoload -U +X bashcompinit && bashcompinit
    """)


def generate_completion(shell: Optional[str] = None) -> str:
    """
    Generate a shell completion script for the lanes command.

    Args:
        shell: ``bash`` or ``zsh`` (defaults to the basename of ``$SHELL``)

    Returns:
        str: The completion script
    """
    if not shell:
        shell = os.path.basename(os.environ.get("SHELL", ""))

    body = (
        _BASH_TEMPLATE
        .replace("PROFILE_COMMANDS", " ".join(PROFILE_COMMANDS))
        .replace("COMMANDS", " ".join(COMMANDS))
        .replace("SHELLS", " ".join(SHELLS))
        .replace("CONFIG_FILENAME", CONFIG_FILENAME)
    )

    kind = shell.lower()
    if kind == "bash":
        return body.lstrip("\n")
    if kind == "zsh":
        return _ZSH_HEADER.lstrip("\n") + body

    raise UnsupportedShellError(shell)
