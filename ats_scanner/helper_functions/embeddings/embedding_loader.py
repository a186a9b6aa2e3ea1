"""
embedding_loader.py
Used to load HuggingFace sentence-embedding models with optional cache.
"""

from typing import Dict, Optional

from langchain_core.embeddings import Embeddings

def load_embedding_model(
    model_name: str,
    loaded_embedding_models: Optional[Dict[str, Embeddings]] = None,
    device: str = "cpu",
) -> Embeddings:
    """
    Load a HuggingFace sentence-transformers model wrapped as a LangChain `Embeddings`,
    optionally using a provided cache dictionary.

    If the model is already present in `loaded_embedding_models`, it is returned directly.
    Otherwise it is loaded (downloading from the HuggingFace Hub if not found locally).

    Args:
        model_name (str): Name of the HuggingFace model to load.
        loaded_embedding_models (Optional[Dict[str, Embeddings]], default=None): Optional
            dictionary to cache loaded models. Keys are model names.
        device (str): Torch device to run the model on.

    Returns:
        Embeddings: LangChain embeddings model.

    Raises:
        RuntimeError: If the model fails to load or download.
    """
    if loaded_embedding_models is not None and model_name in loaded_embedding_models:
        return loaded_embedding_models[model_name]

    try:
        from langchain_huggingface import HuggingFaceEmbeddings

        embedding_model = HuggingFaceEmbeddings(
            model_name=model_name,
            model_kwargs={"device": device},
        )
    except Exception as e:
        raise RuntimeError(f"Failed to load HuggingFace embedding model '{model_name}': {e}")

    # Cache for reuse
    if loaded_embedding_models is not None:
        loaded_embedding_models[model_name] = embedding_model

    return embedding_model
