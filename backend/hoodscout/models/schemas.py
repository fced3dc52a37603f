"""Schemas for the API and the scoring engine."""
from pydantic import BaseModel, Field, ConfigDict, confloat, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any, Mapping, Set, Type
from datetime import datetime
from .enums import Category, SalaryTier


Percentage = confloat(ge=0, le=100)


class UserProfile(BaseModel):
    """Questionnaire answers driving the weight derivation.

    Every answer is optional. Field aliases match the questionnaire keys sent by
    the frontend, the snake_case names are accepted as well.
    """
    age_bracket: Optional[str] = Field(None, alias="edad")
    family_situation: Optional[str] = Field(None, alias="situacionFamiliar")
    lifestyle: List[str] = Field(default_factory=list, alias="estiloVida")
    priorities: List[str] = Field(default_factory=list, alias="prioridades")
    environment: Optional[str] = Field(None, alias="ambiente")
    air_quality: Optional[str] = Field(None, alias="calidadAire")
    work_modality: Optional[str] = Field(None, alias="modalidadTrabajo")
    housing_type: Optional[str] = Field(None, alias="tipoVivienda")
    budget: Optional[str] = Field(None, alias="presupuesto")
    security_level: Optional[str] = Field(None, alias="nivelSeguridad")
    commute_distance: Optional[str] = Field(None, alias="distanciaTrabajo")
    nightlife: Optional[str] = Field(None, alias="vidaNocturna")
    hospital_access: Optional[str] = Field(None, alias="accesoHospitales")
    school_quality: Optional[str] = Field(None, alias="calidadEscuelas")
    shop_access: Optional[str] = Field(None, alias="accesoTiendas")
    public_transport: Optional[str] = Field(None, alias="transportePublico")
    taxi_use: Optional[str] = Field(None, alias="usoTaxis")
    bike_use: Optional[str] = Field(None, alias="usoBicicleta")
    parking_need: Optional[str] = Field(None, alias="necesidadParking")
    physical_activity: Optional[str] = Field(None, alias="actividadFisica")
    trail_need: Optional[str] = Field(None, alias="necesidadSenderos")
    university_proximity: Optional[str] = Field(None, alias="cercaniaUniversidad")
    day_leisure: Optional[str] = Field(None, alias="ocioDiurno")
    night_leisure: Optional[str] = Field(None, alias="ocioNocturno")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("lifestyle", "priorities", mode="before")
    @classmethod
    def _coerce_tag_list(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class CategoryValues(BaseModel):
    """Normalized 0-100 values for the core (non-lifestyle) categories."""
    security: Percentage = Field(0.0, alias=Category.SECURITY.value)
    shops: Percentage = Field(0.0, alias=Category.SHOPS.value)
    schools: Percentage = Field(0.0, alias=Category.SCHOOLS.value)
    hospitals: Percentage = Field(0.0, alias=Category.HOSPITALS.value)
    fire_stations: Percentage = Field(0.0, alias=Category.FIRE_STATIONS.value)
    police_stations: Percentage = Field(0.0, alias=Category.POLICE_STATIONS.value)
    night_leisure: Percentage = Field(0.0, alias=Category.NIGHT_LEISURE.value)
    day_leisure: Percentage = Field(0.0, alias=Category.DAY_LEISURE.value)
    universities: Percentage = Field(0.0, alias=Category.UNIVERSITIES.value)
    public_transport: Percentage = Field(0.0, alias=Category.PUBLIC_TRANSPORT.value)
    taxis: Percentage = Field(0.0, alias=Category.TAXIS.value)
    bike_lanes: Percentage = Field(0.0, alias=Category.BIKE_LANES.value)
    walkability: Percentage = Field(0.0, alias=Category.WALKABILITY.value)
    parking: Percentage = Field(0.0, alias=Category.PARKING.value)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def by_category(self) -> Dict[Category, float]:
        """Return the values keyed by Category."""
        return {Category(name): value for name, value in self.model_dump(by_alias=True).items()}


class LifestyleExtras(BaseModel):
    connectivity: Percentage = 0.0
    green_zones: Percentage = Field(0.0, alias="greenZones")
    noise: Percentage = 0.0
    air_quality: Percentage = Field(0.0, alias="airQuality")
    occupability: Percentage = 0.0
    accessibility: Percentage = 0.0
    salary_tier: Optional[SalaryTier] = Field(None, alias="salaryTier")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class NeighborhoodRef(BaseModel):
    """Entry of the neighborhood master list."""
    name: str
    latitude: float = Field(..., alias="lat")
    longitude: float = Field(..., alias="lon")

    model_config = ConfigDict(populate_by_name=True, frozen=True, from_attributes=True)


def _input_keys(model: Type[BaseModel]) -> Set[str]:
    """Field names and aliases a model accepts."""
    keys = set()
    for name, field in model.model_fields.items():
        keys.add(name)
        if field.alias:
            keys.add(field.alias)
    return keys


_CATEGORY_VALUE_KEYS = _input_keys(CategoryValues)
_LIFESTYLE_KEYS = _input_keys(LifestyleExtras)


class NeighborhoodCategoryData(BaseModel):
    """What a category provider returns for one neighborhood.

    Accepts either the nested shape (``category_values`` / ``lifestyle_extras``)
    or one flat record mixing category names and lifestyle keys. Unknown keys
    are rejected.
    """
    name: str
    category_values: CategoryValues = Field(default_factory=CategoryValues)
    lifestyle_extras: LifestyleExtras = Field(default_factory=LifestyleExtras)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _split_flat_record(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or "category_values" in data or "lifestyle_extras" in data:
            return data

        nested: Dict[str, Any] = {"category_values": {}, "lifestyle_extras": {}}
        for key, value in data.items():
            if key in _CATEGORY_VALUE_KEYS:
                nested["category_values"][key] = value
            elif key in _LIFESTYLE_KEYS:
                nested["lifestyle_extras"][key] = value
            else:
                nested[key] = value
        return nested


class ScoredNeighborhood(BaseModel):
    name: str
    base_score: float
    applied_noise: float
    final_score: float
    category_values: CategoryValues
    lifestyle_extras: LifestyleExtras
    match_details: Dict[str, float] = Field(default_factory=dict)
    data_available: bool = True

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RunMetadata(BaseModel):
    run_id: str
    timestamp: datetime
    seed: int
    total_neighborhoods: int = 0
    filtered_out: int = 0
    failed_fetches: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecommendationResponse(BaseModel):
    profile: UserProfile
    weights: Dict[str, int]
    recommendations: List[ScoredNeighborhood]
    metadata: RunMetadata


class WeightContribution(BaseModel):
    profile_field: str
    value: str
    category: Category
    delta: int


class WeightsResponse(BaseModel):
    weights: Dict[str, int]
    contributions: List[WeightContribution]
