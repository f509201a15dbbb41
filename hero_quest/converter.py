from typing import List

from hero_quest.domain.leaderboard import RankedPlayer
from hero_quest.domain.round_rules import progress_state
from hero_quest.models.schemas import LeaderboardSnapshot, PlayerAccount
from hero_quest.models.schema_models import (
    LeaderboardEntrySchema,
    LeaderboardSnapshotSchema,
    PlayerAccountSchema,
    PlayerCreditSchema,
    PlayerInfoSchema,
)


class DataConverter:
    """This class is used to convert rows into the shapes sent to clients."""

    def convert_account_to_player_info(self, account: PlayerAccount) -> PlayerInfoSchema:
        """Convert the account row to its public projection

        Args:
            account (PlayerAccount): The account row

        Returns:
            PlayerInfoSchema: Every public field of the account; credits are left out
        """
        fields = PlayerAccountSchema.model_validate(account).model_dump(
            exclude={"credits", "created_at"}
        )
        return PlayerInfoSchema(**fields, progress_state=progress_state(account))

    def convert_account_to_credit(self, account: PlayerAccount) -> PlayerCreditSchema:
        return PlayerCreditSchema(address_id=account.address_id, credits=account.credits)

    def convert_ranking_to_entries(
        self, ranking: List[RankedPlayer]
    ) -> List[LeaderboardEntrySchema]:
        return [
            LeaderboardEntrySchema(
                rank=position, name=entry.name, address=entry.address, points=entry.points
            )
            for position, entry in enumerate(ranking, start=1)
        ]

    def convert_snapshot(self, snapshot: LeaderboardSnapshot) -> LeaderboardSnapshotSchema:
        return LeaderboardSnapshotSchema(
            snapshot_id=snapshot.snapshot_id,
            created_at=snapshot.created_at,
            entries=[LeaderboardEntrySchema(**entry) for entry in snapshot.entries],
        )
