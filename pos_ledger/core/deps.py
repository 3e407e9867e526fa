from pos_ledger.core.config import settings
from pos_ledger.core.money import MoneyNormalizer


def get_money_normalizer() -> MoneyNormalizer:
    return MoneyNormalizer(settings.money_rounding)


def get_payments_page_size() -> int:
    return settings.payments_page_size
