"""Live completion for the REPL prompt.

Suggestions come from the active scope's command tree (see
``Environment.complete``); this module only adapts them to prompt_toolkit.
"""

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document


class ScopeCompleter(Completer):
    """Completer for whichever scope is on top of the environment's stack."""

    def __init__(self, env):
        self.env = env

    def get_completions(self, document: Document, complete_event):
        word = document.get_word_before_cursor(WORD=True)
        for suggestion in self.env.complete(document.text_before_cursor, word):
            yield Completion(
                suggestion.text,
                start_position=-len(word),
                display_meta=suggestion.description,
            )
