"""
SMS delivery through the hosted gateway.

Every send is best-effort: failures are logged and reported as ``False``,
never raised, so a purchase or lookup is not affected by the gateway.
"""
import logging
import re

import requests
from flask import current_app

log = logging.getLogger(__name__)

DEFAULT_COUNTRY_CODE = '256'


def normalize_phone_number(phone_number, country_code=DEFAULT_COUNTRY_CODE):
    """
    Bring a phone number to ``+<country code><subscriber>`` form.

    ``0712345678``, ``256712345678`` and ``+256712345678`` all become
    ``+256712345678``; any other digit string gets the prefix prepended.
    """
    digits = re.sub(r'\D', '', phone_number or '')
    if digits.startswith('0'):
        return f'+{country_code}{digits[1:]}'
    if digits.startswith(country_code):
        return f'+{digits}'
    return f'+{country_code}{digits}'


def send_sms(phone_number, message):
    url = current_app.config['SMS_API_URL']
    api_key = current_app.config.get('SMS_API_KEY')
    if not api_key:
        log.error("SMS_API_KEY is not configured, dropping message to %s", phone_number)
        return False

    recipient = normalize_phone_number(
        phone_number, current_app.config.get('SMS_COUNTRY_CODE', DEFAULT_COUNTRY_CODE)
    )
    log.info("Sending SMS to %s", recipient)
    log.debug("SMS content: %s", message)

    try:
        r = requests.post(
            url,
            json={'message': message, 'recipients': [recipient]},
            headers={
                'Content-Type': 'application/json',
                'accept': 'application/json',
                'X-API-Key': api_key,
            },
            timeout=current_app.config.get('SMS_TIMEOUT', 10),
        )
    except requests.RequestException as exc:
        log.error("SMS sending error for %s: %s", recipient, exc)
        return False

    if not r.ok:
        log.error("SMS API error: status=%s reason=%s", r.status_code, r.reason)
        return False

    try:
        data = r.json()
    except ValueError:
        log.error("SMS API returned a non-JSON body: %r", r.text[:200])
        return False

    log.debug("SMS API response: %s", data)
    if not isinstance(data, dict) or data.get('status') != 'success':
        log.error("SMS sending failed: %s", data)
        return False
    return True


def send_voucher_sms(phone_number, voucher_code, plan_name):
    message = (
        f"Your Luco WIFI voucher for {plan_name} plan is: ** {voucher_code}.**\n"
        " Thank you for choosing Luco WIFI!"
    )
    return send_sms(phone_number, message)


def send_active_vouchers_sms(phone_number, active_vouchers):
    codes = ','.join(v.code for v in active_vouchers)
    return send_sms(phone_number, f"Active Luco WIFI codes: {codes}")
