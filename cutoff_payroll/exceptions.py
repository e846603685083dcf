"""
Payroll Exceptions
Errors raised by the payroll engine
"""


class PayrollError(Exception):
    """Base class for payroll engine errors"""


class InvalidCategory(PayrollError):
    """Raised when a payroll input names a category the engine cannot price"""

    def __init__(self, category):
        self.category = category
        super().__init__(f"Unknown employee category: {category!r}")
