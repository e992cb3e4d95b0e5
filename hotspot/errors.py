class HotspotError(Exception):
    """Base class for errors the API reports back to the caller."""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'msg': self.message}


class InvalidPlanError(HotspotError):
    status_code = 404

    def __init__(self, plan_id):
        super().__init__(f'Plan not found: {plan_id}')
        self.plan_id = plan_id


class VoucherImportError(HotspotError):
    """The uploaded voucher file is not in the expected format."""
