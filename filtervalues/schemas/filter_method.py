# filtervalues/schemas/filter_method.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from filtervalues.schemas.enums import FeatureKindEnum, TaskTypeEnum


class FilterParamDefinition(BaseModel):
    """
    Defines the structure for a filter method's extra parameter,
    used for populating UI and validation.
    """

    name: str = Field(..., description="Parameter name passed to the filter method.")
    type: str = Field(
        ..., description="Data type (e.g., 'integer', 'float', 'string', 'enum')."
    )
    description: str = Field(
        ..., description="User-friendly description of the parameter."
    )
    default: Optional[Any] = Field(None, description="Default value if not provided.")
    options: Optional[List[Any]] = Field(
        None, description="List of valid choices for 'enum' type."
    )
    range: Optional[Dict[str, Optional[float]]] = Field(
        None, description="e.g., {'min': 0.1, 'max': 1.0, 'step': 0.01}"
    )


class FilterMethodDefinition(BaseModel):
    """
    Schema representing the definition of a registered filter method,
    exposed via the API and used when listing available methods.
    """

    name: str = Field(
        ..., description="Unique identifier name of the method (e.g., 'variance')."
    )
    display_name: str = Field(..., description="User-friendly name for the UI.")
    description: str = Field(..., description="Explanation of what the method scores.")
    supported_tasks: List[TaskTypeEnum] = Field(
        ..., description="Task types the method can score."
    )
    supported_features: List[FeatureKindEnum] = Field(
        ..., description="Feature kinds the method can score."
    )
    required_packages: List[str] = Field(
        default_factory=list, description="Packages loaded before scoring."
    )
    parameters: List[FilterParamDefinition] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
