"""
CRM error taxonomy

Every component raises one of these and never retries or swallows it.
The api_view decorator (apps/core/decorators.py) is the only place that turns
them into HTTP responses.

    Unauthorized     401  no verified caller identity
    NotFound         404  entity absent or owned by another user
    ValidationError  400  input failed validation
    StorageError     500  database or file-system operation failed
"""


class CRMError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_dict(self):
        data = {'error': self.message}
        if self.details:
            data['details'] = self.details
        return data


class Unauthorized(CRMError):
    status_code = 401
    default_message = 'Unauthorized'


class NotFound(CRMError):
    status_code = 404
    default_message = 'Not found'


class ValidationError(CRMError):
    status_code = 400
    default_message = 'Validation error'

    @classmethod
    def from_form(cls, form):
        """Build from a bound, invalid Django form"""
        return cls(details={field: [str(e) for e in errors] for field, errors in form.errors.items()})


class StorageError(CRMError):
    status_code = 500
    default_message = 'Storage error'
