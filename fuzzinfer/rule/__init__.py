"""
Fuzzy rules: antecedent expression trees, consequents and rule blocks.
"""

from fuzzinfer.rule.antecedent import Antecedent
from fuzzinfer.rule.consequent import Consequent
from fuzzinfer.rule.expression import Expression, Operator, Proposition
from fuzzinfer.rule.rule import Rule
from fuzzinfer.rule.rule_block import RuleBlock

__all__ = [
    "Expression",
    "Proposition",
    "Operator",
    "Antecedent",
    "Consequent",
    "Rule",
    "RuleBlock",
]
