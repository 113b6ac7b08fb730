"""Interactive session setup: target domain and API key.

The prompter is the one interactive input of a run. The CLI opens it once,
keeps it for the whole export and closes it on exit. Closing only marks it
unusable: stdin, the input callable and the output stream are left open.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, Optional, TextIO

from .exceptions import PrompterClosedError

DEFAULT_DOMAIN = "api.voiceflow.com"
CUSTOM_DOMAIN_TEMPLATE = "api.{}.voiceflow.com"
BASE_PATH = "/v1/knowledge-base"
API_KEY_PREFIX = "VF.DM."

DOMAIN_PROMPT = "Enter custom domain (or press Enter for default): "
API_KEY_PROMPT = "Enter your API key: "
INVALID_API_KEY_MESSAGE = f'Invalid API key. It must start with "{API_KEY_PREFIX}". Please try again.'

log = logging.getLogger(__name__)


class ConsolePrompter:
    """Line-based prompts over an input callable and an output stream.

    Example:
        with ConsolePrompter() as prompter:
            session = configure_session(prompter)
            ...  # the rest of the run
    """

    def __init__(self, input_func: Optional[Callable[[str], str]] = None,
                 output: Optional[TextIO] = None):
        self._input = input_func or input
        self._output = output
        self.closed = False

    def __enter__(self) -> "ConsolePrompter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def ask(self, prompt: str) -> str:
        """Show ``prompt`` and return the stripped answer.

        Raises:
            PrompterClosedError: If the prompter was already closed
            EOFError: If the input stream ends
        """
        if self.closed:
            raise PrompterClosedError("Prompter is closed")
        return self._input(prompt).strip()

    def say(self, message: str) -> None:
        print(message, file=self.output)

    def close(self) -> None:
        """Refuse further prompts. Nothing is released; the input callable and
        the output stream belong to the caller and stay open.
        """
        if not self.closed:
            log.debug("Closing interactive prompter")
        self.closed = True


@dataclass(frozen=True)
class Session:
    domain: str
    api_key: str = field(repr=False)

    @property
    def base_url(self) -> str:
        return build_base_url(self.domain)


def build_domain(answer: str) -> str:
    """Empty answer -> default domain, otherwise ``api.<answer>.voiceflow.com``."""
    answer = answer.strip()
    if answer == '':
        return DEFAULT_DOMAIN
    return CUSTOM_DOMAIN_TEMPLATE.format(answer)


def build_base_url(domain: str) -> str:
    return f"https://{domain}{BASE_PATH}"


def is_valid_api_key(value: str) -> bool:
    return value.startswith(API_KEY_PREFIX)


def prompt_domain(prompter: ConsolePrompter) -> str:
    domain = build_domain(prompter.ask(DOMAIN_PROMPT))
    log.debug(f"Using domain {domain}")
    return domain


def prompt_api_key(prompter: ConsolePrompter) -> str:
    """Ask for the API key until one with the required prefix is entered."""
    while True:
        api_key = prompter.ask(API_KEY_PROMPT)
        if is_valid_api_key(api_key):
            return api_key
        prompter.say(INVALID_API_KEY_MESSAGE)


def configure_session(prompter: ConsolePrompter) -> Session:
    """Prompt for the domain, then the API key."""
    domain = prompt_domain(prompter)
    api_key = prompt_api_key(prompter)
    return Session(domain=domain, api_key=api_key)
