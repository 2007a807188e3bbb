"""Form action state returned to the submitting form"""

from typing import Dict, List, Optional
from pydantic import BaseModel


class State(BaseModel):
    """
    Result of a failed form action.

    Example:
        {
            "errors": {"customerId": ["Please select a customer."]},
            "message": "Missing Fields. Failed to Create Invoice."
        }
    """
    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None
