"""Router module for iljeong.

Provides intent classification, command building and the interpreter pipeline.
"""

from .builder import CommandBuilder
from .intent import GROUP_ORDER, IntentCategory, IntentClassifier, IntentMatch
from .interpreter import MSG_UNRECOGNIZED, CommandInterpreter

__all__ = [
    "GROUP_ORDER",
    "MSG_UNRECOGNIZED",
    "CommandBuilder",
    "CommandInterpreter",
    "IntentCategory",
    "IntentClassifier",
    "IntentMatch",
]
