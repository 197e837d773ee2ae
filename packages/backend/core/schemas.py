"""Request/response contract shared by the engine and the API layer.

Python attributes are snake_case; the wire format is camelCase
(``memoryRequired``, ``useCaseDescription``, ``usedLlmReranking``, ...).
Both spellings are accepted on input.
"""

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TaskType = Literal[
    "text-generation",
    "classification",
    "summarization",
    "question-answering",
    "code-generation",
    "embedding",
]
GpuMemoryTier = Literal["8gb", "16gb", "24gb", "40gb", "80gb"]
InferenceDevice = Literal["consumer-gpu", "datacenter-gpu", "cpu-only", "apple-silicon"]
LicenseType = Literal["any", "permissive", "commercial", "non-commercial"]
InferenceFramework = Literal["any", "transformers", "llama.cpp", "vllm", "onnx", "ollama"]
Quantization = Literal["none", "int8", "int4", "gptq", "awq"]
DeploymentTarget = Literal["local-dev", "on-prem-server", "cloud-vm", "edge-device"]

TASK_TYPES: tuple[str, ...] = get_args(TaskType)

MIN_LATENCY_MS = 20
MAX_LATENCY_MS = 500
MAX_DESCRIPTION_LENGTH = 1000


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ModelRecommendation(CamelModel):
    """A catalog entry for one candidate model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    provider: str
    parameters: str  # "7B", "335M"
    memory_required: str  # "16 GB", "512 MB"
    latency: str  # "~50ms/token"
    license: str
    score: float
    reasoning: str
    tradeoffs: list[str] = Field(default_factory=list)
    is_warning: bool = False


class RecommendationConfig(CamelModel):
    """User deployment constraints."""

    task_type: TaskType
    gpu_memory: GpuMemoryTier
    inference_device: InferenceDevice
    max_latency: int = Field(ge=MIN_LATENCY_MS, le=MAX_LATENCY_MS)
    license_type: LicenseType
    inference_framework: InferenceFramework = "any"
    quantization: Quantization = "none"
    deployment_target: DeploymentTarget = "local-dev"
    use_case_description: str = Field(default="", max_length=MAX_DESCRIPTION_LENGTH)

    @property
    def has_description(self) -> bool:
        return bool(self.use_case_description.strip())


class RecommendationResult(CamelModel):
    """Ranked output of the engine or the reranker."""

    primary: ModelRecommendation
    alternatives: list[ModelRecommendation]
    warning: ModelRecommendation


class RecommendationResponse(RecommendationResult):
    """Result returned to callers, flagged with whether the LLM blend ran."""

    used_llm_reranking: bool = False


class ValidationIssue(BaseModel):
    """One rejected request field."""

    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Body of a 422 response."""

    error: str = "Validation failed"
    details: list[ValidationIssue]
