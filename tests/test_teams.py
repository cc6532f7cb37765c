import pytest

from challenger.scoring import AVERAGE, BEST, SUM, TeamSnapshot, compute_team_leaderboard
from challenger.scoring.teams import aggregate, compute_team_totals, member_display
from challenger.scoring.totals import best_by_activity

from conftest import result

TEAM = TeamSnapshot(id=1, name='Iron Lungs', member_ids=(1, 2, 3))


def bests(*rows, activity_ids=('squat',)):
    by_user = {}
    for r in rows:
        by_user.setdefault(r.user_id, []).append(r)
    return {uid: best_by_activity(rs, activity_ids) for uid, rs in by_user.items()}


class TestAggregate:
    @pytest.mark.parametrize('method, expected', [(SUM, 60), (AVERAGE, 20), (BEST, 30)])
    def test_methods_diverge(self, method, expected):
        member_bests = bests(result(1, 'squat', 10), result(2, 'squat', 20), result(3, 'squat', 30))
        team = compute_team_totals(TEAM, TEAM.member_ids, member_bests, ['squat'], method)
        assert team['total_score'] == expected
        assert team['workout_scores']['squat']['score'] == expected

    def test_empty_is_zero(self):
        assert aggregate([], SUM) == 0

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            aggregate([1, 2], 'MEDIAN')

    def test_average_uses_members_with_a_score(self):
        member_bests = bests(result(1, 'squat', 10), result(2, 'squat', 30))
        team = compute_team_totals(TEAM, TEAM.member_ids, member_bests, ['squat'], AVERAGE)
        assert team['total_score'] == 20


class TestTeamTotals:
    def test_no_results_returns_none(self):
        assert compute_team_totals(TEAM, TEAM.member_ids, {}, ['squat'], SUM) is None

    def test_counted_ids_limit_total(self):
        member_bests = bests(
            result(1, 'squat', 100),
            result(1, 'rowing_4min', 900),
            activity_ids=('squat', 'rowing_4min'),
        )
        team = compute_team_totals(
            TEAM, TEAM.member_ids, member_bests, ['squat', 'rowing_4min'], SUM,
            counted_ids=['squat'],
        )
        assert team['total_score'] == 100
        assert team['workout_scores']['rowing_4min']['score'] == 900

    def test_members_sorted_and_truncated(self):
        roster = TeamSnapshot(id=2, name='Big Squad', member_ids=(1, 2, 3, 4, 5))
        member_bests = bests(*[result(uid, 'squat', uid * 10) for uid in roster.member_ids])
        names = {uid: f'M{uid}' for uid in roster.member_ids}

        team = compute_team_totals(roster, roster.member_ids, member_bests, ['squat'], SUM,
                                   names=names, display_limit=3)
        squat = team['workout_scores']['squat']

        assert [m['name'] for m in squat['shown']] == ['M5', 'M4', 'M3']
        assert squat['more'] == 2
        assert len(squat['members']) == 5


def test_member_display():
    assert member_display(['a', 'b'], 3) == (['a', 'b'], 0)
    assert member_display(['a', 'b', 'c', 'd'], 3) == (['a', 'b', 'c'], 1)


def test_team_leaderboard_skips_empty_teams_and_ranks():
    teams = [
        TeamSnapshot(id=1, name='Alpha', member_ids=(1, 2)),
        TeamSnapshot(id=2, name='Bravo', member_ids=(3,)),
        TeamSnapshot(id=3, name='Ghosts', member_ids=(9,)),
    ]
    member_bests = bests(result(1, 'squat', 200), result(2, 'squat', 100), result(3, 'squat', 250))

    board = compute_team_leaderboard(teams, member_bests, SUM, ['squat'])

    assert [(row['name'], row['total_score'], row['rank']) for row in board] == [
        ('Alpha', 300, 1),
        ('Bravo', 250, 2),
    ]
