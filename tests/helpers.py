from ledger.domain import LedgerEntry


def make_entry(id, date_key, category, amount, description="", owner_ref="u1"):
    return LedgerEntry(
        id=id,
        owner_ref=owner_ref,
        date_key=date_key,
        category=category,
        amount=amount,
        description=description,
    )
