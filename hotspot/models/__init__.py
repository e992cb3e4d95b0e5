from hotspot.models.voucher import Voucher
from hotspot.models.purchased_voucher import PurchasedVoucher
from hotspot.models.profile import Profile
from hotspot.models.token_blocklist import TokenBlocklist

__all__ = ['Voucher', 'PurchasedVoucher', 'Profile', 'TokenBlocklist']
