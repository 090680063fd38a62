"""
Batch evaluation over pandas data.

``BatchEngineEvaluator`` runs one inference cycle per row of a DataFrame
of inputs; ``BatchMembershipCalculator`` computes the membership Series of
every term of a variable.
"""

import time
from typing import Optional

import numpy as np
import pandas as pd

from fuzzinfer import get_logger
from fuzzinfer.engine import Engine
from fuzzinfer.errors import ErrorCodes, FuzzyError, ProcessingError
from fuzzinfer.variable import Variable

logger = get_logger(__name__)


class BatchEngineEvaluator:
    """
    Evaluates an engine over a table of inputs.

    Rows are processed in index order on the same engine, so output
    variables with ``lock_previous_value`` carry their value from one row
    to the next, as in a time series.

    Example:
        ```python
        evaluator = BatchEngineEvaluator(engine)
        inputs = pd.DataFrame({"service": [1.0, 5.0, 9.0]})
        outputs = evaluator.evaluate(inputs)
        # outputs["tip"] -> defuzzified tip per row
        ```
    """

    def __init__(self, engine: Engine):
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def evaluate(self, inputs: pd.DataFrame, restart: bool = True) -> pd.DataFrame:
        """
        Process every row of ``inputs``.

        Args:
            inputs: One column per input variable; extra columns are ignored
            restart: Reset the engine before the first row

        Returns:
            DataFrame with one column per output variable and the index of
            ``inputs``

        Raises:
            ProcessingError: If an input column is missing or a row fails
        """
        self._validate_inputs(inputs)

        input_names = [variable.name for variable in self._engine.input_variables]
        output_names = [variable.name for variable in self._engine.output_variables]
        results = np.full((len(inputs), len(output_names)), np.nan, dtype=float)

        if inputs.empty:
            logger.warning("Empty DataFrame provided for batch evaluation")
            return pd.DataFrame(results, index=inputs.index, columns=output_names)

        if restart:
            self._engine.restart()

        start_time = time.time()
        values = inputs[input_names].to_numpy(dtype=float)
        for row, (label, row_values) in enumerate(zip(inputs.index, values)):
            for variable, value in zip(self._engine.input_variables, row_values):
                variable.value = float(value)
            try:
                self._engine.process()
            except FuzzyError as e:
                logger.error(f"Batch evaluation failed at row {label}: {e}")
                raise ProcessingError(
                    message=f"Engine evaluation failed at row {label}",
                    error_code=ErrorCodes.PROC_BATCH_FAILED,
                    details={
                        "row": str(label),
                        "inputs": dict(zip(input_names, map(float, row_values))),
                        "error": e.message,
                    },
                ) from e
            for column, variable in enumerate(self._engine.output_variables):
                results[row, column] = variable.value

        logger.debug(
            f"Evaluated {len(inputs)} rows in {time.time() - start_time:.3f}s"
        )
        return pd.DataFrame(results, index=inputs.index, columns=output_names)

    def _validate_inputs(self, inputs: pd.DataFrame) -> None:
        if not isinstance(inputs, pd.DataFrame):
            raise ProcessingError(
                message="Inputs must be a pandas DataFrame",
                error_code=ErrorCodes.PROC_BATCH_FAILED,
                details={"type": type(inputs).__name__},
            )

        missing = [
            variable.name
            for variable in self._engine.input_variables
            if variable.name not in inputs.columns
        ]
        if missing:
            logger.error(f"Missing input columns: {missing}")
            raise ProcessingError(
                message=f"Missing input columns: {', '.join(missing)}",
                error_code=ErrorCodes.PROC_MISSING_COLUMN,
                details={"missing": missing, "columns": list(inputs.columns)},
            )


class BatchMembershipCalculator:
    """
    Computes the membership of a Series of values in every term of a
    variable.

    Example:
        ```python
        calculator = BatchMembershipCalculator(engine.input_variable("service"))
        memberships = calculator.calculate_memberships(pd.Series([1.0, 5.0]))
        # {"service_poor": pd.Series([...]), "service_good": pd.Series([...])}
        ```
    """

    def __init__(self, variable: Variable):
        self._variable = variable

    def calculate_memberships(
        self, values: pd.Series, prefix: Optional[str] = None
    ) -> dict[str, pd.Series]:
        """
        Membership Series for every term.

        Args:
            values: Values to fuzzify; NaN values give NaN memberships
            prefix: Prefix of the result keys; the variable name when omitted

        Returns:
            Dictionary mapping ``<prefix>_<term>`` to a Series with the index
            of ``values``

        Raises:
            ProcessingError: If ``values`` is not a pandas Series
        """
        if not isinstance(values, pd.Series):
            raise ProcessingError(
                message="Values must be a pandas Series",
                error_code=ErrorCodes.PROC_BATCH_FAILED,
                details={"type": type(values).__name__},
            )

        prefix = self._variable.name if prefix is None else prefix
        result = {}
        for term in self._variable.terms:
            result[f"{prefix}_{term.name}"] = term.evaluate(values.astype(float))
        logger.debug(
            f"Computed memberships of {len(values)} values in "
            f"{len(self._variable.terms)} terms of <{self._variable.name}>"
        )
        return result

    def to_frame(self, values: pd.Series, prefix: Optional[str] = None) -> pd.DataFrame:
        """Memberships as a DataFrame with one column per term."""
        return pd.DataFrame(self.calculate_memberships(values, prefix), index=values.index)
