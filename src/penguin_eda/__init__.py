"""Exploratory data analysis of the Palmer penguins dataset."""

from .clean import CleaningOutcome, clean, drop_incomplete_rows
from .dataset import DatasetSchemaError, load_penguins, validate_schema
from .summarize import body_mass_correlations, describe_columns, pearson, species_means

__version__ = "0.1.0"

__all__ = [
    "CleaningOutcome",
    "DatasetSchemaError",
    "body_mass_correlations",
    "clean",
    "describe_columns",
    "drop_incomplete_rows",
    "load_penguins",
    "pearson",
    "species_means",
    "validate_schema",
]
