"""The closed set of task shapes an AI-generated worksheet may contain.

Models only enforce shape: which keys exist and what scalar types they
hold. Cardinality and text rules live in taskgate.validation so that each
failure keeps its own diagnostic code.
"""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

# [leftIndex, rightIndex]
IndexPair = Annotated[list[StrictInt], Field(min_length=2, max_length=2)]


class _TaskModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SingleChoiceTask(_TaskModel):
    type: Literal["single_choice"]
    question: StrictStr
    options: list[StrictStr]
    correct_index: StrictInt


class MultipleChoiceTask(_TaskModel):
    type: Literal["multiple_choice"]
    question: StrictStr
    options: list[StrictStr]
    correct_indices: list[StrictInt]


class OpenQuestionTask(_TaskModel):
    type: Literal["open_question"]
    question: StrictStr
    correct_answer: StrictStr


class MatchingTask(_TaskModel):
    type: Literal["matching"]
    instruction: StrictStr
    left_column: list[StrictStr]
    right_column: list[StrictStr]
    correct_pairs: list[IndexPair]


class Blank(_TaskModel):
    position: StrictInt
    correct_answer: StrictStr


class FillBlankTask(_TaskModel):
    type: Literal["fill_blank"]
    text_with_blanks: StrictStr
    blanks: list[Blank]


Task = Annotated[
    Union[SingleChoiceTask, MultipleChoiceTask, OpenQuestionTask, MatchingTask, FillBlankTask],
    Field(discriminator="type"),
]

TASK_MODELS: dict[str, type[_TaskModel]] = {
    "single_choice": SingleChoiceTask,
    "multiple_choice": MultipleChoiceTask,
    "open_question": OpenQuestionTask,
    "matching": MatchingTask,
    "fill_blank": FillBlankTask,
}

# Task kinds whose prompt is a `question` field
QUESTION_TASKS = (SingleChoiceTask, MultipleChoiceTask, OpenQuestionTask)
