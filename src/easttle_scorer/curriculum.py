"""NZ Curriculum English writing expectations for Years 0-8.

Each year lists, per writing strand, what students are currently expected to
do and the next steps that move them on. Category scores are mapped onto the
strands so next steps can be chosen for a student's weakest categories.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

STRANDS: tuple[str, ...] = (
    "ideas",
    "structure",
    "language",
    "sentences",
    "spelling",
    "punctuation",
)

CATEGORY_STRANDS: dict[str, str] = {
    "Ideas": "ideas",
    "Structure": "structure",
    "Organisation": "structure",
    "Vocabulary": "language",
    "Sentence Style": "sentences",
    "Punctuation": "punctuation",
    "Spelling": "spelling",
}


@dataclass(frozen=True, slots=True)
class StrandExpectation:
    current: str
    next_steps: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class YearLevelCurriculum:
    """Expectations for one school year, keyed by strand."""

    year_level: int
    phase: int
    strands: Mapping[str, StrandExpectation]

    @property
    def label(self) -> str:
        return f"Year {self.year_level}"

    def next_steps_for(self, categories: Iterable[str]) -> List[str]:
        """Return one unused next step per category, following the category order."""
        used: Dict[str, int] = {}
        steps: List[str] = []
        for category in categories:
            strand = CATEGORY_STRANDS[category]
            options = self.strands[strand].next_steps
            index = used.get(strand, 0)
            if index >= len(options):
                continue
            used[strand] = index + 1
            steps.append(options[index])
        return steps


_RAW_CURRICULUM: dict[int, dict[str, tuple[str, tuple[str, ...]]]] = {
    0: {
        "ideas": (
            "Draws pictures and uses some letters/words to record ideas",
            (
                "Write a simple sentence about their picture",
                "Add more detail to ideas through talking before writing",
                "Use personal experiences as topics for writing",
            ),
        ),
        "structure": (
            "Creates simple texts (labels, captions, lists)",
            (
                "Write simple recounts with a beginning",
                "Include 2-3 related ideas in sequence",
                'Use "I" statements to tell about themselves',
            ),
        ),
        "language": (
            "Uses familiar oral vocabulary in writing",
            (
                "Stretch vocabulary beyond everyday words",
                "Use describing words (adjectives) like colors and sizes",
                "Include action words (verbs) in sentences",
            ),
        ),
        "sentences": (
            "Attempts simple sentences with support",
            (
                "Write complete sentences with subject and verb",
                'Start sentences with "I", "The", "My"',
                'Use "and" to join two ideas',
            ),
        ),
        "spelling": (
            "Uses beginning sounds and some sight words",
            (
                "Spell high-frequency words correctly (I, a, the, is, to, and)",
                "Use initial and final sounds in unknown words",
                "Write CVC words phonetically (cat, dog, run)",
            ),
        ),
        "punctuation": (
            "Beginning to understand spaces between words",
            (
                "Use finger spaces between words",
                "Start sentences with a capital letter",
                "Put a full stop at the end of a sentence",
            ),
        ),
    },
    1: {
        "ideas": (
            "Writes about personal experiences with some detail",
            (
                "Add more specific details (who, what, where)",
                "Include feelings or reactions in writing",
                "Develop one main idea with supporting details",
            ),
        ),
        "structure": (
            "Creates simple texts with a beginning and end",
            (
                "Write texts with a clear beginning, middle, and end",
                "Use time connectives (first, then, next, finally)",
                "Keep ideas in logical order",
            ),
        ),
        "language": (
            "Uses simple describing words and verbs",
            (
                "Use more specific nouns (golden retriever vs dog)",
                "Add adverbs to describe actions (ran quickly)",
                "Include dialogue in stories",
            ),
        ),
        "sentences": (
            'Writes simple and compound sentences using "and"',
            (
                'Vary sentence beginnings (not always "I" or "The")',
                'Use "but" and "so" to join sentences',
                "Write sentences of different lengths",
            ),
        ),
        "spelling": (
            "Spells common words correctly, uses phonetic spelling for others",
            (
                "Spell Essential List 1 words correctly",
                "Use common spelling patterns (-ing, -ed, -er)",
                "Check and fix spelling using word cards",
            ),
        ),
        "punctuation": (
            "Uses capital letters and full stops with some consistency",
            (
                'Use capital letters for names and "I"',
                "Use question marks for questions",
                "Use commas in lists (red, blue and green)",
            ),
        ),
    },
    2: {
        "ideas": (
            "Develops ideas with relevant details and some elaboration",
            (
                "Show not tell (describe feelings through actions)",
                "Add sensory details (what they saw, heard, felt)",
                "Include interesting or surprising details",
            ),
        ),
        "structure": (
            "Writes texts with clear beginning, middle, and end",
            (
                "Create an engaging opening that hooks the reader",
                "Build tension or interest in the middle",
                "Write satisfying endings that connect to the beginning",
            ),
        ),
        "language": (
            "Uses varied vocabulary including adjectives and adverbs",
            (
                "Choose precise words for effect",
                "Use similes (as fast as lightning)",
                "Include technical vocabulary for the topic",
            ),
        ),
        "sentences": (
            "Writes compound sentences with connectives",
            (
                'Use complex sentences with "because", "when", "if"',
                "Start sentences in different ways for effect",
                "Use short sentences for impact",
            ),
        ),
        "spelling": (
            "Spells most common words correctly",
            (
                "Spell Essential List 2 words correctly",
                "Use spelling strategies (look-cover-write-check)",
                "Apply common spelling rules (-tion, doubling consonants)",
            ),
        ),
        "punctuation": (
            "Uses basic punctuation consistently",
            (
                "Use speech marks for dialogue correctly",
                "Use apostrophes for contractions (don't, can't)",
                "Use exclamation marks for effect",
            ),
        ),
    },
    3: {
        "ideas": (
            "Develops and elaborates ideas with relevant details",
            (
                "Develop character through actions, dialogue, and thoughts",
                "Create atmosphere through descriptive detail",
                "Use examples and evidence to support main ideas",
            ),
        ),
        "structure": (
            "Organizes texts with paragraphs or sections",
            (
                "Use topic sentences to introduce paragraphs",
                "Link paragraphs with transition words",
                "Plan and organize ideas before writing",
            ),
        ),
        "language": (
            "Uses precise vocabulary and some figurative language",
            (
                "Use metaphors for effect",
                "Choose vocabulary to create mood",
                "Use personification and onomatopoeia",
            ),
        ),
        "sentences": (
            "Uses a variety of sentence structures",
            (
                "Use sentence variety deliberately for effect",
                "Start sentences with adverbs or phrases",
                "Use relative clauses (who, which, that)",
            ),
        ),
        "spelling": (
            "Spells most words correctly including some complex words",
            (
                "Spell Essential List 3 words correctly",
                "Proofread and edit for spelling errors",
                "Use dictionary and spell-check tools",
            ),
        ),
        "punctuation": (
            "Uses a range of punctuation correctly",
            (
                "Use commas in complex sentences",
                "Punctuate dialogue with new lines",
                "Use apostrophes for possession (the dog's tail)",
            ),
        ),
    },
    4: {
        "ideas": (
            "Develops ideas with supporting detail and some elaboration across the text",
            (
                "Develop ideas with increasing depth and insight",
                "Use specific examples and evidence to support arguments",
                "Create well-developed characters with motivations",
            ),
        ),
        "structure": (
            "Organizes ideas into paragraphs with clear topic sentences",
            (
                "Use a range of text structures for different purposes",
                "Create effective introductions that set context",
                "Write conclusions that summarize or reflect",
            ),
        ),
        "language": (
            "Uses a range of vocabulary including subject-specific words",
            (
                "Use vocabulary deliberately to influence the reader",
                "Include technical and academic vocabulary",
                "Use figurative language with intention",
            ),
        ),
        "sentences": (
            "Writes complex sentences with subordinate clauses",
            (
                "Vary sentence structure for rhythm and emphasis",
                "Use passive voice when appropriate",
                "Control sentence length for effect",
            ),
        ),
        "spelling": (
            "Spells most words correctly including subject-specific vocabulary",
            (
                "Spell Essential List 4 words correctly",
                "Apply spelling rules for prefixes and suffixes",
                "Use etymology to help with spelling",
            ),
        ),
        "punctuation": (
            "Uses a range of punctuation including speech marks and apostrophes",
            (
                "Use colons to introduce lists or explanations",
                "Use semicolons to join related ideas",
                "Use dashes and brackets for parenthesis",
            ),
        ),
    },
    5: {
        "ideas": (
            "Develops and sustains ideas with depth and insight",
            (
                "Integrate multiple perspectives or viewpoints",
                "Use abstract ideas alongside concrete examples",
                "Develop themes consistently across the text",
            ),
        ),
        "structure": (
            "Controls structure across a range of text types",
            (
                "Manipulate structure for deliberate effect",
                "Use flashback, flash-forward, or non-linear structures",
                "Balance narrative and descriptive elements",
            ),
        ),
        "language": (
            "Selects vocabulary for precision and effect",
            (
                "Use connotation and nuance in word choice",
                "Develop a personal voice and style",
                "Adapt register for different audiences",
            ),
        ),
        "sentences": (
            "Controls a variety of sentence structures",
            (
                "Use rhetorical devices (repetition, tripling)",
                "Vary syntax for emphasis and rhythm",
                "Use fragments and minor sentences intentionally",
            ),
        ),
        "spelling": (
            "Spells accurately including complex and technical words",
            (
                "Spell Essential List 5 words correctly",
                "Use morphology to spell unfamiliar words",
                "Proofread systematically for errors",
            ),
        ),
        "punctuation": (
            "Uses punctuation accurately for clarity and effect",
            (
                "Use punctuation to control pace and emphasis",
                "Use ellipsis for effect",
                "Punctuate complex dialogue exchanges",
            ),
        ),
    },
    6: {
        "ideas": (
            "Develops sophisticated ideas with complexity and nuance",
            (
                "Explore ambiguity and multiple interpretations",
                "Use symbolism and extended metaphor",
                "Develop original and creative perspectives",
            ),
        ),
        "structure": (
            "Uses structure confidently across text types",
            (
                "Subvert or experiment with genre conventions",
                "Control pacing and tension effectively",
                "Use structural devices for thematic effect",
            ),
        ),
        "language": (
            "Uses sophisticated vocabulary with precision",
            (
                "Develop distinctive authorial voice",
                "Use language to challenge or provoke",
                "Master formal and informal registers",
            ),
        ),
        "sentences": (
            "Uses sophisticated sentence structures with control",
            (
                "Use syntax to mirror meaning",
                "Master complex multi-clause sentences",
                "Use sentence patterns for stylistic effect",
            ),
        ),
        "spelling": (
            "Spells accurately across all word types",
            (
                "Spell Essential List 6 words correctly",
                "Maintain accuracy under pressure",
                "Use a range of strategies independently",
            ),
        ),
        "punctuation": (
            "Uses the full range of punctuation confidently",
            (
                "Use punctuation for subtle effects",
                "Master all apostrophe uses",
                "Punctuate for voice and rhythm",
            ),
        ),
    },
    7: {
        "ideas": (
            "Develops complex ideas with insight and originality",
            (
                "Synthesize ideas from multiple sources",
                "Develop sustained and cohesive arguments",
                "Explore sophisticated themes with maturity",
            ),
        ),
        "structure": (
            "Controls structure with sophistication across genres",
            (
                "Integrate multiple text types within a single piece",
                "Use structure to convey meaning and theme",
                "Master transitions between sections and ideas",
            ),
        ),
        "language": (
            "Uses language with sophistication and flair",
            (
                "Develop a mature and distinctive voice",
                "Use language to create layers of meaning",
                "Adapt style for different purposes and contexts",
            ),
        ),
        "sentences": (
            "Uses varied and sophisticated syntax",
            (
                "Use syntax to create rhythm and flow",
                "Master embedding and layering of clauses",
                "Use grammatical choices for stylistic effect",
            ),
        ),
        "spelling": (
            "Spells accurately including specialized vocabulary",
            (
                "Spell Essential List 7 words correctly",
                "Master subject-specific terminology",
                "Edit for accuracy in final drafts",
            ),
        ),
        "punctuation": (
            "Uses punctuation with sophistication",
            (
                "Use punctuation to enhance meaning and voice",
                "Master all advanced punctuation conventions",
                "Use punctuation creatively within conventions",
            ),
        ),
    },
    8: {
        "ideas": (
            "Develops ideas with maturity, depth, and intellectual rigour",
            (
                "Engage critically with complex concepts",
                "Develop original and thought-provoking perspectives",
                "Sustain sophisticated ideas across extended texts",
            ),
        ),
        "structure": (
            "Masters structure across all text types",
            (
                "Experiment with innovative structural approaches",
                "Use structure to enhance thematic complexity",
                "Control extended and multi-part texts",
            ),
        ),
        "language": (
            "Uses language with precision, power, and originality",
            (
                "Develop a compelling and authentic voice",
                "Use language to challenge and engage readers",
                "Master the nuances of formal academic writing",
            ),
        ),
        "sentences": (
            "Masters sentence variety and control",
            (
                "Use syntax with conscious artistry",
                "Control complex grammatical structures",
                "Adapt sentence style for genre and purpose",
            ),
        ),
        "spelling": (
            "Spells accurately across all contexts",
            (
                "Spell Essential List 8 words correctly",
                "Maintain accuracy in extended writing",
                "Use spelling knowledge to learn new words",
            ),
        ),
        "punctuation": (
            "Masters all punctuation conventions",
            (
                "Use punctuation as a tool for expression",
                "Maintain consistency and accuracy throughout",
                "Apply conventions to new and complex situations",
            ),
        ),
    },
}


def _phase(year_level: int) -> int:
    if year_level <= 3:
        return 1
    if year_level <= 6:
        return 2
    return 3


NZC_CURRICULUM: dict[int, YearLevelCurriculum] = {
    year: YearLevelCurriculum(
        year_level=year,
        phase=_phase(year),
        strands={
            strand: StrandExpectation(current=current, next_steps=steps)
            for strand, (current, steps) in raw.items()
        },
    )
    for year, raw in _RAW_CURRICULUM.items()
}


def curriculum_for_year(year_level: int | None) -> YearLevelCurriculum | None:
    """Return the expectations for a year level, or None outside Years 0-8."""
    if year_level is None:
        return None
    return NZC_CURRICULUM.get(year_level)
