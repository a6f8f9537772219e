"""Wage Levels SDK - Core functionality for wage level and take-home estimates."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_data_path,
    get_occupations_path,
    get_wages_path,
    get_col_index_path,
)

from .schemas import (
    OccupationRecord,
    WageThresholds,
    PipelineStats,
    ClassificationResult,
    TaxBreakdown,
    LocationBreakdown,
    ComparisonResult,
    SalaryGaps,
    ColAdjustment,
)

from .money import (
    parse_salary,
    format_salary,
    round_to_dollar,
    clamp_salary,
)

from .reference import (
    ReferenceData,
    load_reference_data,
)

from .wage_table import (
    WageTable,
    load_catalog,
    save_catalog,
)

from .pipeline import (
    SourceReadError,
    MalformedRowError,
    PipelineResult,
    hourly_to_annual,
    read_occupations,
    read_wages,
    run as run_pipeline,
    write_artifacts,
    ANNUAL_WORK_HOURS,
)

from .regional import RegionalModel

from .levels import (
    LEVEL_LABELS,
    Location,
    LevelClassifier,
    classify,
)

from .taxes import (
    TaxEngine,
    TaxRules,
    load_tax_rules,
    calculate_federal_income_tax,
)

from .cost_of_living import (
    CostOfLivingIndex,
    load_col_index,
)

from .comparison import (
    ComparisonEngine,
    adjust_for_col,
    salary_gaps,
)

from .loaders import (
    build_comparison_engine,
    build_level_classifier,
    build_tax_engine,
    load_occupations,
    load_wage_table,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_data_path",
    "get_occupations_path",
    "get_wages_path",
    "get_col_index_path",
    # Schemas
    "OccupationRecord",
    "WageThresholds",
    "PipelineStats",
    "ClassificationResult",
    "TaxBreakdown",
    "LocationBreakdown",
    "ComparisonResult",
    "SalaryGaps",
    "ColAdjustment",
    # Salary input
    "parse_salary",
    "format_salary",
    "round_to_dollar",
    "clamp_salary",
    # Reference tables
    "ReferenceData",
    "load_reference_data",
    # Wage table
    "WageTable",
    "load_catalog",
    "save_catalog",
    # Data pipeline
    "SourceReadError",
    "MalformedRowError",
    "PipelineResult",
    "hourly_to_annual",
    "read_occupations",
    "read_wages",
    "run_pipeline",
    "write_artifacts",
    "ANNUAL_WORK_HOURS",
    # Classification
    "RegionalModel",
    "LEVEL_LABELS",
    "Location",
    "LevelClassifier",
    "classify",
    # Taxes
    "TaxEngine",
    "TaxRules",
    "load_tax_rules",
    "calculate_federal_income_tax",
    # Comparisons
    "CostOfLivingIndex",
    "load_col_index",
    "ComparisonEngine",
    "adjust_for_col",
    "salary_gaps",
    # Runtime builders
    "build_comparison_engine",
    "build_level_classifier",
    "build_tax_engine",
    "load_occupations",
    "load_wage_table",
]
