import random
from datetime import datetime

from challenger.scoring import assign_ranks, build_event_leaderboard, compute_leaderboard
from challenger.scoring.teams import TeamSnapshot

from conftest import result


def entry(user_id, name, total, reached_at=None, workouts=None):
    return {
        'user_id': user_id,
        'name': name,
        'total_score': total,
        'workout_scores': workouts or {},
        'reached_at': reached_at,
        'rank': 0,
    }


class TestAssignRanks:
    def test_ties_share_rank_and_next_skips(self):
        rows = [entry(3, 'C', 30), entry(1, 'A', 50), entry(2, 'B', 50)]
        ranked = compute_leaderboard(rows)
        assert [(r['name'], r['rank']) for r in ranked] == [('A', 1), ('B', 1), ('C', 3)]

    def test_deterministic_for_any_input_order(self):
        rows = [entry(i, f'U{i}', score) for i, score in enumerate([50, 50, 30, 30, 30, 10])]
        expected = compute_leaderboard(rows)
        for _ in range(20):
            shuffled = rows[:]
            random.shuffle(shuffled)
            assert compute_leaderboard(shuffled) == expected

    def test_earlier_reached_lists_first_within_tie(self):
        rows = [
            entry(1, 'Zed', 50, reached_at=datetime(2024, 1, 1, 10)),
            entry(2, 'Amy', 50, reached_at=datetime(2024, 1, 1, 11)),
        ]
        ranked = compute_leaderboard(rows)
        assert [r['name'] for r in ranked] == ['Zed', 'Amy']
        assert [r['rank'] for r in ranked] == [1, 1]

    def test_inputs_not_mutated(self):
        rows = [entry(1, 'A', 10)]
        assign_ranks(rows)
        assert rows[0]['rank'] == 0


class TestActivityScope:
    def test_only_entries_with_that_activity(self):
        rows = [
            entry(1, 'A', 90, workouts={'squat': {'score': 40, 'raw_value': 100, 'reps': 1}}),
            entry(2, 'B', 80, workouts={'squat': {'score': 60, 'raw_value': 120, 'reps': 1}}),
            entry(3, 'C', 70),
        ]
        board = compute_leaderboard(rows, 'squat')
        assert [(r['name'], r['score'], r['rank']) for r in board] == [('B', 60, 1), ('A', 40, 2)]


class Event:
    def __init__(self, is_team_event=False, method='SUM'):
        self.id = 7
        self.is_team_event = is_team_event
        self.team_scoring_method = method


class Person:
    def __init__(self, id, name):
        self.id = id
        self.name = name


class TestEventLeaderboard:
    def test_total_sums_canonical_bests(self):
        results = [
            result(1, 'squat', 300, event_id=7),
            result(1, 'bench', 200, event_id=7),
            result(1, 'rowing_4min', 999, event_id=7),
            result(2, 'squat', 450, event_id=7),
        ]
        data = build_event_leaderboard(Event(), [Person(1, 'Ann'), Person(2, 'Ben')], results)

        overall = data['overall']
        assert [(r['name'], r['total_score'], r['rank']) for r in overall] == [('Ann', 500, 1), ('Ben', 450, 2)]
        assert overall[0]['workout_scores']['rowing_4min']['score'] == 999
        assert overall[0]['workout_scores']['squat']['rank'] == 2
        assert data['team_overall'] is None

        boards = {b['activity_id']: b for b in data['workouts']}
        assert set(boards) == {'squat', 'bench', 'rowing_4min'}
        assert boards['squat']['entries'][0]['name'] == 'Ben'

    def test_results_from_unknown_users_still_listed(self):
        data = build_event_leaderboard(Event(), [], [result(5, 'squat', 100)])
        assert data['overall'][0]['name'] == 'Unknown User'

    def test_team_views(self):
        results = [
            result(1, 'squat', 10),
            result(2, 'squat', 20),
            result(3, 'squat', 30),
            result(4, 'squat', 25),
        ]
        people = [Person(i, f'P{i}') for i in range(1, 5)]
        teams = [TeamSnapshot(1, 'Alpha'), TeamSnapshot(2, 'Bravo')]
        team_of = {1: 1, 2: 1, 3: 1, 4: 2}

        data = build_event_leaderboard(Event(True, 'AVERAGE'), people, results, teams=teams, team_of=team_of)

        assert data['team_scoring_method'] == 'AVERAGE'
        assert [(r['name'], r['total_score'], r['rank']) for r in data['team_overall']] == [
            ('Bravo', 25, 1),
            ('Alpha', 20, 2),
        ]
        squat = data['team_workouts'][0]['entries']
        assert squat[1]['more'] == 0
        assert [m['name'] for m in squat[1]['shown']] == ['P3', 'P2', 'P1']

    def test_float_drift_still_ties(self):
        results = [
            result(1, 'squat', 0.1), result(1, 'bench', 0.2), result(1, 'deadlift', 0.3),
            result(2, 'squat', 0.3), result(2, 'bench', 0.2), result(2, 'deadlift', 0.1),
        ]
        data = build_event_leaderboard(Event(), [Person(1, 'A'), Person(2, 'B')], results)
        assert [r['rank'] for r in data['overall']] == [1, 1]

    def test_unscoreable_users_listed_after_ranked_rows(self):
        results = [result(1, 'squat', 100)]
        people = [Person(2, 'NoProfile'), Person(1, 'Ok')]
        data = build_event_leaderboard(Event(), people, results, unscoreable_ids={2})

        overall = [(r['name'], r['total_score'], r['rank'], r['scoreable']) for r in data['overall']]
        assert overall == [('Ok', 100, 1, True), ('NoProfile', 'Not set', None, False)]


def test_nearly_equal_scores_share_rank():
    rows = [entry(1, 'A', 0.1 + 0.2), entry(2, 'B', 0.3), entry(3, 'C', 0.2)]
    assert [r['rank'] for r in assign_ranks(rows)] == [1, 1, 3]
