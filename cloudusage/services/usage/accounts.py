from typing import Dict, Iterable, Optional

from cloudusage.core.config import AWSAccount, get_settings


class AccountDirectory:
    """
    Friendly names for usage account ids, read from AWS_ACCOUNTS.
    The first entry wins when an id is configured twice.
    """

    def __init__(self, accounts: Optional[Iterable[AWSAccount]] = None):
        if accounts is None:
            accounts = get_settings().AWS_ACCOUNTS
        self._names: Dict[str, str] = {}
        for account in accounts:
            self._names.setdefault(account.id, account.name)

    def resolve_name(self, account_id: str) -> Optional[str]:
        return self._names.get(account_id)
