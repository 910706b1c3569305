"""Route-to-action resolution."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.unit

from gamepanel.core.demo.actions import (
    DEFAULT_ROUTE_RULES,
    ActionRegistry,
    RouteRule,
    default_registry,
    route,
    split_path,
)
from gamepanel.core.demo.responses import SIMULATED_MESSAGES


@pytest.fixture()
def registry():
    return default_registry()


class TestDefaultTable:
    @pytest.mark.parametrize(
        "path,method,expected",
        [
            ("/api/server/start", "POST", "server.start"),
            ("/api/server/quick-settings", "PUT", "config.edit"),
            ("/api/backups", "POST", "backups.create"),
            ("/api/backups", "DELETE", "backups.delete"),
            ("/api/backups/restore", "POST", "backups.restore"),
            ("/api/management/bans", "DELETE", "players.unban"),
            ("/api/auth/users", "POST", "users.create"),
            ("/api/management/activity", "DELETE", "activity.clear"),
        ],
    )
    def test_literal_routes(self, registry, path, method, expected):
        assert registry.resolve(path, method) == expected

    @pytest.mark.parametrize(
        "path,method,expected",
        [
            ("/api/players/alice/kick", "POST", "players.kick"),
            ("/api/players/alice/ban", "POST", "players.ban"),
            ("/api/players/alice/ban", "DELETE", "players.unban"),
            ("/api/players/alice/teleport/death", "POST", "players.teleport"),
            ("/api/players/alice/inventory/clear", "POST", "players.clear_inventory"),
            ("/api/players/alice/op", "DELETE", "players.op"),
            ("/api/auth/users/bob", "PUT", "users.edit"),
            ("/api/auth/users/bob", "DELETE", "users.delete"),
            ("/api/roles/3", "DELETE", "roles.manage"),
            ("/api/backups/abc123", "DELETE", "backups.delete"),
            ("/api/backups/abc123/restore", "POST", "backups.restore"),
            ("/api/scheduler/tasks/7", "PUT", "scheduler.edit"),
            ("/api/scheduler/quick-commands/7/execute", "POST", "scheduler.edit"),
            ("/api/management/permissions/groups/builders", "DELETE", "players.permissions"),
            ("/api/server/config/server.json", "PUT", "config.edit"),
            ("/api/management/mods/worldedit", "DELETE", "mods.delete"),
            ("/api/management/plugins/essentials", "DELETE", "plugins.delete"),
        ],
    )
    def test_parameterized_routes(self, registry, path, method, expected):
        assert registry.resolve(path, method) == expected

    def test_literal_wins_over_parameter_for_same_method(self, registry):
        # /api/backups/:id/restore exists, but the literal /api/backups/restore is checked first.
        assert registry.resolve("/api/backups/restore", "POST") == "backups.restore"
        # DELETE has no literal entry, so the per-item rule applies.
        assert registry.resolve("/api/backups/restore", "DELETE") == "backups.delete"

    def test_unmapped_routes_resolve_to_none(self, registry):
        assert registry.resolve("/api/players", "PATCH") is None
        assert registry.resolve("/api/players/alice/kick", "GET") is None
        assert registry.resolve("/api/unknown", "POST") is None
        assert registry.resolve("", "POST") is None

    def test_method_is_case_insensitive(self, registry):
        assert registry.resolve("/api/server/stop", "post") == "server.stop"

    def test_trailing_slash_is_ignored(self, registry):
        assert registry.resolve("/api/backups/", "POST") == "backups.create"
        assert registry.resolve("/api/players/alice/kick/", "POST") == "players.kick"

    def test_parameter_never_matches_empty_segment(self, registry):
        assert registry.resolve("/api/players//kick", "POST") is None

    def test_parameter_matches_single_segment_only(self, registry):
        assert registry.resolve("/api/auth/users/bob/extra", "DELETE") is None

    def test_read_routes_are_flagged_not_simulated(self, registry):
        assert registry.resolve("/api/auth/users", "GET") == "users.view"
        assert registry.is_simulated("users.view") is False
        assert "users.view" not in registry.simulated_actions()
        assert "server.start" in registry.simulated_actions()

    def test_every_simulated_action_has_a_message(self, registry):
        missing = sorted(registry.simulated_actions() - set(SIMULATED_MESSAGES))
        assert missing == []

    def test_every_default_rule_resolves_to_its_own_action(self, registry):
        shadowed = []
        for rule in DEFAULT_ROUTE_RULES:
            path = "/" + "/".join("sample" if s.startswith(":") else s for s in rule.segments)
            resolved = registry.resolve(path, rule.method)
            if resolved != rule.action:
                shadowed.append((rule.method, rule.template, resolved))
        assert shadowed == []

    def test_default_rules_are_unique_per_template_and_method(self):
        keys = [(rule.template, rule.method) for rule in DEFAULT_ROUTE_RULES]
        assert len(keys) == len(set(keys))


class TestPrecedence:
    def test_literal_beats_pattern_regardless_of_declaration_order(self):
        registry = ActionRegistry(
            route("/api/backups/:id", POST="backups.touch")
            + route("/api/backups/restore", POST="backups.restore")
        )
        assert registry.resolve("/api/backups/restore", "POST") == "backups.restore"
        assert registry.resolve("/api/backups/abc", "POST") == "backups.touch"

    def test_fewer_wildcards_win(self):
        registry = ActionRegistry(
            route("/api/:section/:name/kick", POST="generic.kick")
            + route("/api/players/:name/kick", POST="players.kick")
        )
        assert registry.resolve("/api/players/alice/kick", "POST") == "players.kick"
        assert registry.resolve("/api/npcs/bob/kick", "POST") == "generic.kick"

    def test_declaration_order_breaks_ties(self):
        registry = ActionRegistry(
            route("/api/:section/alice", POST="first.match")
            + route("/api/players/:name", POST="second.match")
        )
        assert registry.resolve("/api/players/alice", "POST") == "first.match"
        assert registry.resolve("/api/players/bob", "POST") == "second.match"

    def test_pattern_with_wrong_method_is_skipped(self):
        registry = ActionRegistry(
            route("/api/players/:name/ban", DELETE="players.unban")
            + route("/api/:section/:name/ban", POST="generic.ban")
        )
        assert registry.resolve("/api/players/alice/ban", "POST") == "generic.ban"


class TestConstruction:
    def test_duplicate_rule_rejected(self):
        with pytest.raises(ValueError, match="duplicate_route_rule"):
            ActionRegistry(
                [
                    RouteRule("/api/chat/send", "POST", "chat.send"),
                    RouteRule("/api/chat/send/", "POST", "chat.other"),
                ]
            )

    def test_conflicting_simulate_flag_rejected(self):
        with pytest.raises(ValueError, match="conflicting_simulate_flag"):
            ActionRegistry(
                [
                    RouteRule("/api/a", "POST", "thing.edit", simulate_for_demo=True),
                    RouteRule("/api/b", "POST", "thing.edit", simulate_for_demo=False),
                ]
            )

    def test_rule_introspection(self):
        rule = RouteRule("/api/players/:name/teleport/death", "POST", "players.teleport")
        assert rule.wildcard_count == 1
        assert not rule.is_literal
        assert split_path("/api/players/") == ("api", "players")
        assert split_path("/") == ()
