"""
Central registry of error codes for fuzzinfer.

Error codes follow the pattern: CATEGORY-ErrorName

Categories:
- CONFIG: Engine description loading and validation errors
- TERM: Term configuration errors
- NORM: Norm and hedge configuration errors
- FUNC: Function formula parsing and evaluation errors
- RULE: Rule parsing and evaluation errors
- ENGINE: Engine structure errors
- DEFUZZ: Defuzzification errors
- FACTORY: Registry lookup errors
- PROC: Batch processing errors

Usage:
    from fuzzinfer.errors.error_codes import ErrorCodes

    raise ParseError(
        message="mismatching parentheses in: (x + 1",
        error_code=ErrorCodes.FUNC_MISMATCHED_PARENTHESES,
    )
"""


class ErrorCodes:
    """Central registry of error codes for consistent error handling."""

    # Engine description errors
    CONFIG_LOAD_FAILED = "CONFIG-LoadFailed"
    CONFIG_FILE_NOT_FOUND = "CONFIG-FileNotFound"
    CONFIG_INVALID_YAML = "CONFIG-InvalidYaml"
    CONFIG_VALIDATION_FAILED = "CONFIG-ValidationFailed"
    CONFIG_BUILD_FAILED = "CONFIG-BuildFailed"

    # Term configuration errors
    TERM_MISSING_PARAMETERS = "TERM-MissingParameters"
    TERM_INVALID_PARAMETER = "TERM-InvalidParameter"
    TERM_MISSING_ENGINE = "TERM-MissingEngine"

    # Norm, hedge and activation errors
    NORM_INVALID_PARAMETER = "NORM-InvalidParameter"
    ACTIVATION_INVALID_PARAMETER = "ACTIVATION-InvalidParameter"

    # Function term errors
    FUNC_MISMATCHED_PARENTHESES = "FUNC-MismatchedParentheses"
    FUNC_UNKNOWN_TOKEN = "FUNC-UnknownToken"
    FUNC_ARITY_MISMATCH = "FUNC-ArityMismatch"
    FUNC_ILL_FORMED = "FUNC-IllFormed"
    FUNC_NOT_LOADED = "FUNC-NotLoaded"
    FUNC_UNKNOWN_VARIABLE = "FUNC-UnknownVariable"
    FUNC_EVALUATION_FAILED = "FUNC-EvaluationFailed"

    # Rule errors
    RULE_SYNTAX = "RULE-Syntax"
    RULE_NOT_LOADED = "RULE-NotLoaded"
    RULE_MISSING_CONJUNCTION = "RULE-MissingConjunction"
    RULE_MISSING_DISJUNCTION = "RULE-MissingDisjunction"
    RULE_MISSING_IMPLICATION = "RULE-MissingImplication"
    RULE_BLOCK_LOAD_FAILED = "RULE-BlockLoadFailed"

    # Engine errors
    ENGINE_UNKNOWN_VARIABLE = "ENGINE-UnknownVariable"
    ENGINE_UNKNOWN_RULE_BLOCK = "ENGINE-UnknownRuleBlock"
    ENGINE_UNKNOWN_TERM = "ENGINE-UnknownTerm"
    ENGINE_NOT_READY = "ENGINE-NotReady"

    # Defuzzification errors
    DEFUZZ_MISSING_DEFUZZIFIER = "DEFUZZ-MissingDefuzzifier"
    DEFUZZ_MISSING_AGGREGATION = "DEFUZZ-MissingAggregation"
    DEFUZZ_INVALID_TYPE = "DEFUZZ-InvalidType"

    # Registry errors
    FACTORY_UNKNOWN_NAME = "FACTORY-UnknownName"

    # Batch processing errors
    PROC_MISSING_COLUMN = "PROC-MissingColumn"
    PROC_BATCH_FAILED = "PROC-BatchFailed"
