"""Recognized ABAQUS keywords and their classification."""

from enum import Enum


class ModelKeyword(Enum):
    """Keywords handled by the model-level section state machine."""
    HEADING = "HEADING"
    SOLID_SECTION = "SOLID SECTION"
    SHELL_SECTION = "SHELL SECTION"
    MASS = "MASS"
    MATERIAL = "MATERIAL"
    ELASTIC = "ELASTIC"
    DENSITY = "DENSITY"
    PLASTIC = "PLASTIC"
    EXPANSION = "EXPANSION"
    DAMPING = "DAMPING"
    STEP = "STEP"
    STATIC = "STATIC"
    FREQUENCY = "FREQUENCY"
    BUCKLE = "BUCKLE"
    DYNAMIC = "DYNAMIC"
    OUTPUT = "OUTPUT"
    END_STEP = "END STEP"
    BOUNDARY = "BOUNDARY"
    CLOAD = "CLOAD"
    DLOAD = "DLOAD"
    DSLOAD = "DSLOAD"
    NODE_PRINT = "NODE PRINT"
    EL_PRINT = "EL PRINT"
    SECTION_PRINT = "SECTION PRINT"
    NODE_FILE = "NODE FILE"
    EL_FILE = "EL FILE"
    CONTACT_FILE = "CONTACT FILE"
    NODE_OUTPUT = "NODE OUTPUT"
    ELEMENT_OUTPUT = "ELEMENT OUTPUT"
    ENERGY_OUTPUT = "ENERGY OUTPUT"
    CONTACT_OUTPUT = "CONTACT OUTPUT"
    SKIP = "*"

    @classmethod
    def lookup(cls, name: str) -> "ModelKeyword":
        """Map a normalized keyword name to its variant; unknown names map to SKIP."""
        try:
            member = cls(name)
        except ValueError:
            return cls.SKIP
        return member


BOUNDARY_KEYWORDS = frozenset({
    ModelKeyword.BOUNDARY, ModelKeyword.CLOAD, ModelKeyword.DLOAD, ModelKeyword.DSLOAD,
})

PRINT_FILE_KEYWORDS = frozenset({
    ModelKeyword.NODE_PRINT, ModelKeyword.EL_PRINT, ModelKeyword.SECTION_PRINT,
    ModelKeyword.NODE_FILE, ModelKeyword.EL_FILE, ModelKeyword.CONTACT_FILE,
})

OUTPUT_KEYWORDS = frozenset({
    ModelKeyword.NODE_OUTPUT, ModelKeyword.ELEMENT_OUTPUT,
    ModelKeyword.ENERGY_OUTPUT, ModelKeyword.CONTACT_OUTPUT,
})

ANALYSIS_KEYWORDS = frozenset({
    ModelKeyword.STATIC, ModelKeyword.FREQUENCY,
    ModelKeyword.BUCKLE, ModelKeyword.DYNAMIC,
})

# Part/assembly structuring keywords, consumed by the assembly adapter
ASSEMBLY_KEYWORDS = frozenset({
    "PART", "END PART", "ASSEMBLY", "END ASSEMBLY", "INSTANCE", "END INSTANCE",
})

# Legitimately present in a deck but irrelevant to mesh-only parsing
MODEL_ONLY_KEYWORDS = frozenset(
    {kw.value for kw in ModelKeyword if kw is not ModelKeyword.SKIP}
    | ASSEMBLY_KEYWORDS
    | {"INITIAL CONDITIONS", "AMPLITUDE", "SECTION CONTROLS", "PREPRINT",
       "RESTART", "CONTROLS", "MONITOR", "TRANSVERSE SHEAR STIFFNESS",
       "BEAM SECTION", "BEAM GENERAL SECTION", "MEMBRANE SECTION", "ORIENTATION"}
)


def is_model_only(name: str) -> bool:
    return name in MODEL_ONLY_KEYWORDS
