"""Results table built from the ranking groups"""
from typing import List

from .competition import Competition
from .schemas import ResultRow


def build_results(competition: Competition) -> List[ResultRow]:
    """Rows ordered by ranking group, then by rank"""
    rows: List[ResultRow] = []
    for group_index, group in enumerate(competition.ranking_groups, start=1):
        ranks = group.rankings()
        for participant in group.participants:
            rows.append(ResultRow(
                ranking_group=group_index,
                rank=ranks[participant],
                start_number=participant.start_number,
                name=participant.full_name,
                club=participant.club_name,
                gender=participant.gender.value,
                weight_class=participant.weight_class,
                body_weight=participant.body_weight,
                best_snatch=participant.best_snatch,
                best_clean_and_jerk=participant.best_clean_and_jerk,
                total=participant.total_score,
                sinclair_score=round(participant.sinclair_score, 2),
            ))
    return rows
