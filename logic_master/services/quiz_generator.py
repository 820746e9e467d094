"""Reasoning question bank and session question generation."""
import math
from enum import Enum
from typing import Dict, List, NamedTuple, Sequence, Tuple

from logic_master.schemas import Question


class Category(str, Enum):
    """Reasoning categories served by the game."""
    DEDUCTION = "deduction"
    INDUCTION = "induction"
    PATTERN = "pattern"
    ANALOGY = "analogy"
    CONDITIONAL = "conditional"
    FALLACY = "fallacy"
    CATEGORICAL = "categorical"
    SEQUENCE = "sequence"


class CategoryInfo(NamedTuple):
    name: str
    description: str
    difficulty_range: Tuple[float, float]


CATEGORIES: Dict[Category, CategoryInfo] = {
    Category.DEDUCTION: CategoryInfo(
        "Deductive reasoning", "Deriving specific conclusions from general principles", (0.3, 0.9)),
    Category.INDUCTION: CategoryInfo(
        "Inductive reasoning", "Inferring general rules from specific cases", (0.4, 0.9)),
    Category.PATTERN: CategoryInfo(
        "Pattern recognition", "Spotting and predicting repeating structures", (0.2, 0.9)),
    Category.ANALOGY: CategoryInfo(
        "Analogical reasoning", "Reasoning from similar relationships", (0.3, 0.8)),
    Category.CONDITIONAL: CategoryInfo(
        "Conditional reasoning", "Judging from premises and conditions", (0.5, 1.0)),
    Category.FALLACY: CategoryInfo(
        "Fallacy detection", "Finding errors in arguments", (0.6, 1.0)),
    Category.CATEGORICAL: CategoryInfo(
        "Categorical reasoning", "Working with classes and set relations", (0.4, 0.9)),
    Category.SEQUENCE: CategoryInfo(
        "Sequence reasoning", "Predicting the next element of a sequence", (0.3, 1.0)),
}

# Each entry: (text, options, correct_index, explanation, hint), ordered easy to hard
QUESTION_BANK: Dict[Category, List[Tuple[str, List[str], int, str, str]]] = {
    Category.DEDUCTION: [
        (
            "All mammals have lungs. All whales are mammals. Which conclusion follows?",
            ["Every animal with lungs is a mammal", "All whales have lungs",
             "Some animals with lungs are not whales", "Some mammals are not whales"],
            1,
            "A syllogism: whales are mammals and mammals have lungs, so whales have lungs.",
            "Link the two premises through the term they share",
        ),
        (
            "If it rains, the ground gets wet. The ground is dry. What can you infer?",
            ["It certainly did not rain", "It may have rained", "It certainly rained", "Nothing can be said"],
            0,
            "If P then Q; not Q; therefore not P.",
            "Apply the rule of denying the consequent",
        ),
        (
            "All dogs are animals. Some animals are pets. Which statement must be true?",
            ["All pets are dogs", "All dogs are pets", "Some dogs may be pets", "Some pets are certainly not dogs"],
            2,
            "Neither premise fixes how dogs and pets overlap, so only a possibility follows.",
            "Separate the relationships that are certain from those that are only possible",
        ),
    ],
    Category.INDUCTION: [
        (
            "3, 6, 9, 12, 15, _. Which number fills the gap?",
            ["17", "18", "21", "24"],
            1,
            "Each term adds 3, so the next is 15 + 3 = 18.",
            "Compare each pair of neighbouring numbers",
        ),
        (
            "In a survey of 100 residents of city A, 95 brush their teeth twice a day. "
            "Which inference is most reasonable?",
            ["Residents of A care more about dental health than other cities",
             "About 95% of residents of A brush twice a day",
             "People who do not brush get more cavities",
             "City A has fewer dentists than other cities"],
            1,
            "A sample supports an estimate for the population it was drawn from, nothing more.",
            "Generalise from the sample without reading more into it",
        ),
        (
            "A drug worked for 99.7% of patients in one trial and for 70% in another. "
            "What is the most reasonable explanation?",
            ["The second trial was badly designed", "The drug changed between trials",
             "The trials probably involved different patients or conditions",
             "The first trial was faked"],
            2,
            "Different populations, doses or conditions explain differing results best.",
            "Look for reasonable factors that differ between the trials",
        ),
    ],
    Category.PATTERN: [
        (
            "What comes next? ○, □, △, ○, □, △, ○, ?",
            ["○", "□", "△", "◇"],
            1,
            "The three shapes repeat in a cycle, so □ follows ○.",
            "Find the part that repeats",
        ),
        (
            "A, C, F, J, ? Which letter comes next?",
            ["M", "N", "O", "P"],
            2,
            "The gaps grow by one (2, 3, 4), so the next gap is 5: J + 5 = O.",
            "Check whether the distance between neighbours changes",
        ),
        (
            "1, 4, 9, 16, 25, ? Which number comes next?",
            ["30", "36", "42", "49"],
            1,
            "These are the squares 1² to 5², so the next is 6² = 36.",
            "Think of each number as a function of its position",
        ),
    ],
    Category.ANALOGY: [
        (
            "Book is to reading as food is to:",
            ["Cook", "Restaurant", "Recipe", "Eating"],
            3,
            "A book is what is read; food is what is eaten.",
            "Check that both pairs share the same relationship",
        ),
        (
            "Doctor is to patient as teacher is to:",
            ["School", "Education", "Student", "Textbook"],
            2,
            "A doctor serves patients; a teacher serves students.",
            "This is an analogy between roles",
        ),
        (
            "Water is to fish as air is to:",
            ["Aeroplane", "Bird", "Cloud", "Wind"],
            1,
            "Water is where a fish lives; air is where a bird lives.",
            "Think about creatures and the environment they live in",
        ),
    ],
    Category.CONDITIONAL: [
        (
            "If today is Tuesday, tomorrow is Wednesday. Today is not Tuesday. Then:",
            ["Tomorrow is certainly Wednesday", "Tomorrow is certainly not Wednesday",
             "Tomorrow may be Wednesday", "Nothing can be known about tomorrow"],
            2,
            "When P is false, 'if P then Q' says nothing about Q.",
            "A false condition leaves the conclusion undetermined",
        ),
        (
            "In a game, rolling an even number wins. Sam did not win. Which statement must be true?",
            ["Sam did not roll an even number", "Sam rolled an odd number",
             "If Sam had rolled an even number he would have won", "Sam may have rolled an even number"],
            0,
            "If P then Q; not Q; therefore not P (modus tollens).",
            "Deny the consequent: if P then Q, not Q, so not P",
        ),
        (
            "If she studies hard she passes the exam. If she passes she gets a scholarship. "
            "She did not get the scholarship. Which inference is correct?",
            ["She did not study hard", "She passed the exam", "She did not pass the exam",
             "She either did not study hard or did not pass"],
            2,
            "From Q -> R and not R we get not Q: she did not pass.",
            "Chain the conditionals and deny the consequent",
        ),
    ],
    Category.FALLACY: [
        (
            "Which of these is a false attribution of cause?",
            ["Sam studied hard, so he scored well", "The whole class laughed, so the joke must be funny",
             "It rained, so the ground is wet", "I wore my lucky bracelet, so I won the match"],
            3,
            "The bracelet has no causal link to winning, yet the win is credited to it.",
            "Find the outcome credited to something that cannot have caused it",
        ),
        (
            "Which is a typical slippery slope argument?",
            ["If we do not cut emissions, temperatures will rise",
             "If students may use phones in class they will game all day, fail, find no jobs and "
             "cause social problems",
             "Studies show smoking increases lung cancer risk",
             "If it rains we cannot picnic outdoors"],
            1,
            "A small step is inflated into a chain of unlikely extreme consequences.",
            "Look for a chain of consequences that do not necessarily follow",
        ),
        (
            "Which is an example of an ad hominem fallacy?",
            ["His theory is flawed because it ignores the latest data",
             "We cannot accept his climate argument because he drives a gas-guzzling SUV",
             "This building is unsafe because its structure is badly designed",
             "Vaccines work because many clinical trials show it"],
            1,
            "It attacks the person making the argument instead of the argument.",
            "Which rebuttal targets the speaker rather than the claim?",
        ),
    ],
    Category.CATEGORICAL: [
        (
            "All A are B and all B are C. Which statement must be true?",
            ["All C are A", "All A are C", "Some C are not A", "Some A are not C"],
            1,
            "Inclusion is transitive: A is inside B, B is inside C, so A is inside C.",
            "Think of the sets as nested circles",
        ),
        (
            "Of 100 students, 60 study maths and 70 study physics. Which must be true?",
            ["At least 30 study both", "Exactly 30 study both",
             "At least 10 study neither", "Everyone who studies maths studies physics"],
            0,
            "|A ∩ B| >= |A| + |B| - 100 = 30.",
            "Use |A ∪ B| = |A| + |B| - |A ∩ B|",
        ),
        (
            "No honest person is a liar. Some politicians are honest. Which is true?",
            ["All politicians are liars", "Some politicians are not liars",
             "Some liars are politicians", "All liars are politicians"],
            1,
            "Honest people and liars are disjoint, so the honest politicians are not liars.",
            "Start from the fact that the two groups do not overlap",
        ),
    ],
    Category.SEQUENCE: [
        (
            "2, 4, 8, 16, 32, ? Which number comes next?",
            ["36", "48", "64", "128"],
            2,
            "Each term doubles, so 32 × 2 = 64.",
            "Relate each number to the one before it",
        ),
        (
            "1, 3, 6, 10, 15, ? Which number comes next?",
            ["21", "18", "25", "30"],
            0,
            "Triangular numbers: add 2, 3, 4, 5 and then 6.",
            "Could each term be a running total?",
        ),
        (
            "0, 1, 1, 2, 3, 5, 8, ? Which number comes next?",
            ["12", "13", "15", "21"],
            1,
            "Fibonacci: each term is the sum of the previous two, 5 + 8 = 13.",
            "Relate each term to the two before it",
        ),
    ],
}


def clamp_to_category(category: Category, difficulty: float) -> float:
    """Clamp a difficulty into the category's supported range."""
    low, high = CATEGORIES[category].difficulty_range
    return min(max(difficulty, low), high)


def generate(category: str, difficulty: float) -> Question:
    """
    Pick the bank question matching a difficulty.

    The bank entry index is min(floor(difficulty * n), n - 1), so the result is
    deterministic for a given category and difficulty bucket.

    Args:
        category: Category tag
        difficulty: Difficulty scalar (0-1)

    Returns:
        Question tagged with the category and difficulty

    Raises:
        ValueError: If the category is unknown
    """
    key = Category(category)
    entries = QUESTION_BANK[key]
    index = min(int(math.floor(difficulty * len(entries))), len(entries) - 1)
    text, options, correct_index, explanation, hint = entries[index]

    return Question(
        category=key.value,
        difficulty=difficulty,
        text=text,
        options=options,
        correct_index=correct_index,
        explanation=explanation,
        hint=hint,
    )


def generate_session_questions(
    count: int,
    base_difficulty: float,
    categories: Sequence[str]
) -> List[Question]:
    """
    Generate the questions of a session.

    Categories are used in rotation. Difficulty rises gently over the session:
    question i gets base * (1 + i / (2 * count)), clamped to its category range.

    Args:
        count: Number of questions
        base_difficulty: Difficulty from the estimator
        categories: Recommended category tags, in priority order

    Returns:
        List of Question objects
    """
    rotation = [Category(category) for category in categories] or list(Category)

    questions = []
    for i in range(count):
        category = rotation[i % len(rotation)]
        progressive = base_difficulty * (1 + i / (count * 2))
        questions.append(generate(category.value, clamp_to_category(category, progressive)))

    return questions
