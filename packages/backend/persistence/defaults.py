"""Deployment metadata for the curated catalog seeded on startup.

The curated models themselves live in ``core.model_catalog``; this adds
the framework, quantization and deployment-target support the database
tier filters on.
"""

ALL_TARGETS = ["local-dev", "on-prem-server", "cloud-vm", "edge-device"]
SERVER_TARGETS = ["local-dev", "on-prem-server", "cloud-vm"]

LLM_FRAMEWORKS = ["transformers", "llama.cpp", "vllm", "ollama"]
ENCODER_FRAMEWORKS = ["transformers", "onnx"]

LLM_QUANTIZATION = ["int8", "int4", "gptq", "awq"]
ENCODER_QUANTIZATION = ["int8"]

_LLM = {
    "inference_frameworks": LLM_FRAMEWORKS,
    "quantization_formats": LLM_QUANTIZATION,
    "deployment_targets": SERVER_TARGETS,
}
_SMALL_LLM = {
    "inference_frameworks": LLM_FRAMEWORKS + ["onnx"],
    "quantization_formats": LLM_QUANTIZATION,
    "deployment_targets": ALL_TARGETS,
}
_ENCODER = {
    "inference_frameworks": ENCODER_FRAMEWORKS,
    "quantization_formats": ENCODER_QUANTIZATION,
    "deployment_targets": ALL_TARGETS,
}
_SEQ2SEQ = {
    "inference_frameworks": ENCODER_FRAMEWORKS,
    "quantization_formats": ENCODER_QUANTIZATION,
    "deployment_targets": SERVER_TARGETS,
}

DEFAULT_MODEL_METADATA: dict[str, dict[str, list[str]]] = {
    # text-generation
    "llama-3.1-8b": _LLM,
    "mistral-7b": _LLM,
    "phi-3-mini": _SMALL_LLM,
    "gpt2-large": _SMALL_LLM,
    # classification
    "deberta-v3-large": _ENCODER,
    "roberta-large": _ENCODER,
    "distilbert": _ENCODER,
    "bert-base": _ENCODER,
    # summarization
    "bart-large-cnn": _SEQ2SEQ,
    "flan-t5-large": _SEQ2SEQ,
    "llama-3.1-8b-sum": _LLM,
    "t5-small": _ENCODER,
    # question-answering
    "llama-3.1-8b-qa": _LLM,
    "roberta-squad": _ENCODER,
    "flan-t5-qa": _SEQ2SEQ,
    "distilbert-qa": _ENCODER,
    # code-generation
    "codellama-13b": _LLM,
    "starcoder2-7b": _LLM,
    "deepseek-coder-6.7b": _LLM,
    "codegen-350m": _SMALL_LLM,
    # embedding
    "bge-large": _ENCODER,
    "e5-large": _ENCODER,
    "gte-small": _ENCODER,
    "sentence-bert": _ENCODER,
}
