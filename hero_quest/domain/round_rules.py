"""Round progression and credit rules that are independent from HTTP and DB.

Functions here take an account object (an ORM row or anything with the same
attributes) and mutate it in place. All preconditions are checked before the
first attribute is written.

Per-round fields are addressed by name: ``played_1``, ``certified_2``,
``play_time_3``, ``treasure_opened_1`` and so on.
"""

from collections.abc import Iterable

from hero_quest.domain.errors import (
    InsufficientCredits,
    InvalidRound,
    PreviousRoundNotCertified,
    RoundNotPlayed,
    TooEarlyToClaim,
    Unauthorized,
)

ROUNDS = (1, 2, 3)
FINAL_ROUND = 3

STARTING_CREDITS = 1
CLAIM_CREDITS = 3
GRANT_CREDITS = 10
CLAIM_COOLDOWN_MS = 86_400_000


def validate_round(round_number: int, allowed: Iterable[int] = ROUNDS) -> int:
    """Return round_number if it is one of ``allowed``, otherwise raise InvalidRound."""
    allowed = tuple(allowed)
    if round_number not in allowed:
        raise InvalidRound(f"round must be one of {list(allowed)}, got {round_number}")
    return round_number


# ==============================================================================
# ==== Access control ==========================================================
# ==============================================================================


def is_authorized(caller: str, admin_set: Iterable[str]) -> bool:
    return caller in set(admin_set)


def require_admin(caller: str, admin_set: Iterable[str]) -> None:
    if not is_authorized(caller, admin_set):
        raise Unauthorized(f"{caller} is not a game admin")


# ==============================================================================
# ==== Account lifecycle =======================================================
# ==============================================================================


def new_account_fields(address: str, name: str, now: int) -> dict:
    """Initial column values for a freshly registered account."""
    fields = {
        "address_id": address,
        "name": name,
        "heroes_owned": 0,
        "credits": STARTING_CREDITS,
        "gold": 0,
        "point": 0,
        "current_round": 0,
        "game_finished": False,
        "last_claim_time": 0,
        "created_at": now,
    }
    for n in ROUNDS:
        fields[f"played_{n}"] = False
        fields[f"certified_{n}"] = False
        fields[f"play_time_{n}"] = 0
        fields[f"finish_time_{n}"] = 0
    for n in (1, 2):
        fields[f"treasure_opened_{n}"] = False
    return fields


def progress_state(account) -> str:
    """Name of the state-machine node the account currently sits on."""
    state = "not_started"
    for n in ROUNDS:
        if getattr(account, f"certified_{n}"):
            state = f"round{n}_certified"
        elif getattr(account, f"played_{n}"):
            state = f"round{n}_played"
    if account.game_finished:
        state = "finished"
    return state


# ==============================================================================
# ==== Round progression =======================================================
# ==============================================================================


def play_round(account, round_number: int, now: int) -> None:
    """Spend one credit to play ``round_number``.

    Rounds 2 and 3 require the previous round to be certified. Replaying an
    already played round is allowed; it consumes another credit and
    overwrites the play time.

    Raises:
        InvalidRound: round_number is not 1, 2 or 3
        PreviousRoundNotCertified: previous round not certified yet
        InsufficientCredits: credit balance is zero
    """
    validate_round(round_number)
    if round_number > 1 and not getattr(account, f"certified_{round_number - 1}"):
        raise PreviousRoundNotCertified(
            f"round {round_number - 1} must be certified before playing round {round_number}"
        )
    if account.credits <= 0:
        raise InsufficientCredits()

    account.credits -= 1
    setattr(account, f"played_{round_number}", True)
    setattr(account, f"play_time_{round_number}", now)
    account.current_round = round_number


def certify_round(account, round_number: int, points_earned: int, now: int) -> None:
    """Mark a played round as certified and award its points.

    The caller's admin membership is checked by the service before this runs.

    Raises:
        InvalidRound: round_number is not 1, 2 or 3
        PreviousRoundNotCertified: previous round not certified yet
        RoundNotPlayed: target has not played the round
    """
    validate_round(round_number)
    if round_number > 1 and not getattr(account, f"certified_{round_number - 1}"):
        raise PreviousRoundNotCertified(
            f"round {round_number - 1} must be certified before certifying round {round_number}"
        )
    if not getattr(account, f"played_{round_number}"):
        raise RoundNotPlayed(f"round {round_number} has not been played")

    setattr(account, f"certified_{round_number}", True)
    setattr(account, f"finish_time_{round_number}", now)
    account.point += points_earned
    if round_number == FINAL_ROUND:
        account.game_finished = True


# ==============================================================================
# ==== Credit economy ==========================================================
# ==============================================================================


def next_claim_time(account) -> int:
    return account.last_claim_time + CLAIM_COOLDOWN_MS


def claim_periodic_credit(account, now: int) -> int:
    """Add the periodic credit grant. Returns the amount added."""
    if now - account.last_claim_time < CLAIM_COOLDOWN_MS:
        raise TooEarlyToClaim(f"next claim available at {next_claim_time(account)}")

    account.credits += CLAIM_CREDITS
    account.last_claim_time = now
    return CLAIM_CREDITS


def grant_credit(account) -> int:
    """Admin bonus grant; no cooldown. Returns the amount added."""
    account.credits += GRANT_CREDITS
    return GRANT_CREDITS


def invariant_violations(account) -> list[str]:
    """List every account invariant that does not hold. Empty means consistent."""
    violations = []
    for n in ROUNDS:
        if getattr(account, f"certified_{n}") and not getattr(account, f"played_{n}"):
            violations.append(f"certified_{n} without played_{n}")
    for n in (2, 3):
        if getattr(account, f"played_{n}") and not getattr(account, f"certified_{n - 1}"):
            violations.append(f"played_{n} without certified_{n - 1}")
    for n in (1, 2):
        if getattr(account, f"treasure_opened_{n}") and not getattr(account, f"certified_{n}"):
            violations.append(f"treasure_opened_{n} without certified_{n}")
    if bool(account.game_finished) != bool(account.certified_3):
        violations.append("game_finished does not match certified_3")
    if account.credits < 0:
        violations.append("negative credits")
    return violations
