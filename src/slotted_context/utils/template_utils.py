"""Utilities for processing YAML templates with variable substitution."""

import os
import re
import yaml
from typing import Any, Dict, List, Set, Union

from .logging import get_logger

logger = get_logger(__name__)

_VARIABLE = re.compile(r"\{\{\s*([a-zA-Z0-9_]+)\s*\}\}")

def load_yaml_template(template_path: str) -> Dict[str, Any]:
    """
    Load a YAML template from file.
    
    Args:
        template_path: Path to the YAML template file
        
    Returns:
        Dictionary containing the loaded template
        
    Raises:
        OSError: If the file cannot be read
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(template_path, "r", encoding="utf-8") as f:
        template = yaml.safe_load(f)
    if not isinstance(template, dict):
        raise ValueError(f"Template {template_path} must contain a mapping")
    return template

def _substitute(text: str, variables: Dict[str, Any], missing: Set[str]) -> str:
    def replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in variables:
            missing.add(name)
            return match.group(0)
        value = variables[name]
        return "" if value is None else str(value)
    return _VARIABLE.sub(replace, text)

def process_template(template: Union[Dict[str, Any], List[Any], str], variables: Dict[str, Any]) -> Any:
    """
    Replace ``{{var_name}}`` placeholders in every string of a template.
    
    Args:
        template: Template mapping, list or string to process
        variables: Dictionary of variable values to substitute
        
    Returns:
        A new template of the same shape with variables replaced. Unknown
        variables are left in place and logged.
    """
    missing: Set[str] = set()

    def walk(node: Any) -> Any:
        if isinstance(node, str):
            return _substitute(node, variables, missing)
        if isinstance(node, dict):
            return {key: walk(value) for key, value in node.items()}
        if isinstance(node, list):
            return [walk(item) for item in node]
        return node

    result = walk(template)
    if missing:
        logger.warning(
            "Template variables not substituted",
            extra={"missing": sorted(missing), "available": sorted(variables.keys())}
        )
    return result

def load_and_process_template(template_path: str, variables: Dict[str, Any]) -> Dict[str, Any]:
    """Load a YAML template and process its variables in one step."""
    template = load_yaml_template(template_path)
    return process_template(template, variables)

def get_template_dir(module_file: str) -> str:
    """
    Get the template directory for a given module file.
    
    Args:
        module_file: The __file__ attribute of the module
        
    Returns:
        Absolute path to the template directory
    """
    return os.path.dirname(os.path.abspath(module_file))
