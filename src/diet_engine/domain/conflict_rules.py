"""Rule tables for diet-mode conflicts.

``CONDITION_RULES`` maps a condition code to the diet modes it conflicts with.
``AGE_RULES`` and ``PREGNANCY_RULES`` are single-level tables keyed by diet
mode and reported under a synthetic condition code. Adding a rule is a data
change only.
"""

from diet_engine.domain.conflicts import ConflictRule, Severity

_ACR = "ACR (American College of Rheumatology) gout guideline"
_PEDIATRIC = "Pediatric nutrition guideline"
_OBSTETRIC = "Obstetric nutrition guideline"

CONDITION_RULES: dict[str, dict[str, ConflictRule]] = {
    "kidney_disease": {
        "fitness": ConflictRule(
            severity=Severity.ABSOLUTE,
            reason=(
                "Chronic kidney disease requires protein restricted to 0.6-0.8 g/kg. "
                "A high-protein diet increases kidney load and can worsen the disease."
            ),
            source="KDOQI (Kidney Disease Outcomes Quality Initiative) guideline",
            alternative=(
                "Follow a low-protein diet limited to 0.6-0.8 g per kg of "
                "ideal body weight."
            ),
        ),
    },
    "gout": {
        "diet_mode": ConflictRule(
            severity=Severity.ABSOLUTE,
            reason=(
                "Rapid weight loss must be avoided with gout. Ketone production "
                "raises uric acid and can trigger a gout attack."
            ),
            source=_ACR,
            alternative="Aim for gradual weight loss of at most 0.5 kg per week.",
        ),
        "low_carb": ConflictRule(
            severity=Severity.ABSOLUTE,
            reason=(
                "A very low-carbohydrate diet induces ketosis, which raises uric "
                "acid and can trigger a gout attack."
            ),
            source=_ACR,
            alternative="Keep carbohydrates at 40-55% of calories.",
        ),
        "fitness": ConflictRule(
            severity=Severity.WARNING,
            reason=(
                "Some high-protein foods are rich in purines. Prefer low-purine "
                "protein such as chicken breast and egg whites."
            ),
            source=_ACR,
            alternative="Limit organ meats, seafood and red meat.",
        ),
    },
    "diabetes": {
        "low_carb": ConflictRule(
            severity=Severity.WARNING,
            reason=(
                "A very low-carbohydrate diet carries a hypoglycemia risk, "
                "especially with insulin or sulfonylurea medication."
            ),
            source="ADA (American Diabetes Association) guideline",
            alternative=(
                "Keep carbohydrates at 40-50% from complex sources and consult "
                "a physician first."
            ),
        ),
    },
    "hypertension": {},
    "hyperlipidemia": {},
    "cardiovascular_disease": {},
}

AGE_RULES: dict[str, ConflictRule] = {
    "diet_mode": ConflictRule(
        severity=Severity.ABSOLUTE,
        reason=(
            "Children under 18 should not follow a weight-loss diet. Growth "
            "requires sufficient calories and nutrients."
        ),
        source=_PEDIATRIC,
        alternative="Keep a balanced diet and exercise regularly.",
    ),
    "low_carb": ConflictRule(
        severity=Severity.ABSOLUTE,
        reason=(
            "Children under 18 need enough carbohydrate. A very low-carbohydrate "
            "diet can impair growth and development."
        ),
        source=_PEDIATRIC,
        alternative="Keep a balanced diet; carbohydrate is essential for brain development.",
    ),
}

# Evaluated only when the caller states a pregnancy; profiles carry no such flag.
PREGNANCY_RULES: dict[str, ConflictRule] = {
    "diet_mode": ConflictRule(
        severity=Severity.ABSOLUTE,
        reason=(
            "Weight-loss diets must be avoided during pregnancy. Fetal "
            "development requires sufficient calories and nutrients."
        ),
        source=_OBSTETRIC,
        alternative="Aim for the weight gain appropriate to pre-pregnancy BMI.",
    ),
    "low_carb": ConflictRule(
        severity=Severity.ABSOLUTE,
        reason=(
            "Fetal development requires sufficient carbohydrate. A very "
            "low-carbohydrate diet can harm the fetus."
        ),
        source=_OBSTETRIC,
        alternative="Keep a balanced diet with complex carbohydrates.",
    ),
}
