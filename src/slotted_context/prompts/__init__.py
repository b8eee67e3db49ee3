"""Prompt templates for AI generation collaborators."""

import os
from typing import Any, Dict

from ..utils.template_utils import load_and_process_template, get_template_dir

# Directory where this file is located
TEMPLATE_DIR = get_template_dir(__file__)

def get_content_generation_prompt(**kwargs) -> Dict[str, Any]:
    """
    Get the content generation prompt template with variables replaced.
    
    Args:
        **kwargs: Variables to substitute in the template
        
    Returns:
        Processed template with variables replaced
    """
    return load_and_process_template(
        os.path.join(TEMPLATE_DIR, 'content_generation.yaml'),
        kwargs
    )
