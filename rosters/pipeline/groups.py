from rosters.utils.names import normalize_group_name


def build_group_map(groups):
    """
    Map normalized group name -> group id.
    When two groups share a normalized name the later one wins.
    """
    group_map = {}
    for group in groups:
        key = normalize_group_name(group.get("name"))
        if key:
            group_map[key] = group.get("id")
    return group_map


def resolve_groups(client, season_id):
    """Fetch a season's group registry and build its name map."""
    return build_group_map(client.list_groups(season_id))


def match_group(name, group_map):
    return group_map.get(normalize_group_name(name))
