from collections import namedtuple


#---------------------------------------------------------------------------#
#   Endpoint descriptors                                                    #
#       An endpoint is a path, a method and an ordered list of `Param`.     #
#   Every resource accessor of `PixivClient` is generated from the         #
#   `RESOURCES` table below.                                                #
#---------------------------------------------------------------------------#


_param_fields = [
    "name",         #   str *keyword name used by callers.
    "key",          #   str *wire key, "name" if None.
    "required",     #   bool
    "multi",        #   bool *list value, sent as repeated "key" pairs.
    "default",      #   any *sent when caller omits it, None to omit.
]
Param = namedtuple(
    "Param", _param_fields, defaults=[None, False, False, None]
)

_endpoint_fields = [
    "name",             #   str *accessor name inside its group.
    "method",           #   str *"GET" or "POST".
    "path",             #   str *joined to ClientConfig.base_url.
    "params",           #   tuple of `Param`
    "items_key",        #   str or None *array field of a paginated body.
    "requires_auth",    #   bool
    "doc",              #   str
]
Endpoint = namedtuple(
    "Endpoint", _endpoint_fields, defaults=[(), None, True, ""]
)


def required(name, key=None):
    return Param(name, key, required=True)

def optional(name, key=None, default=None):
    return Param(name, key, default=default)

def multi(name, key=None, required=False):
    #   pixiv's array convention, "illust_ids" -> "illust_ids[]".
    return Param(name, key or f"{name}[]", required=required, multi=True)


def build_parameters(endpoint, kwargs):
    """
    Turn keyword arguments into the ordered parameter list of `endpoint`.

    Args:
        endpoint    `Endpoint`
        kwargs      dict
            Caller's keyword arguments, keyed by `Param.name`.

    Returns:
        list of (key, value) in declaration order. Optional parameters left
        as None are dropped, list values expand to one pair per element.

    Raises:
        TypeError
            Unknown keyword or missing required parameter.
        ValueError
            A required multi-valued parameter is empty.
    """
    known = {p.name for p in endpoint.params}
    unknown = set(kwargs) - known
    if unknown:
        raise TypeError(
            "{}() got unexpected keyword argument(s): {}".format(
                endpoint.name, ", ".join(sorted(unknown))
            )
        )

    parameters = []
    for p in endpoint.params:
        value = kwargs.get(p.name, p.default)
        key = p.key or p.name
        if value is None:
            if p.required:
                raise TypeError(
                    f"{endpoint.name}() missing required argument: {p.name!r}"
                )
            continue
        if p.multi:
            if isinstance(value, (str, bytes)):
                value = [value]
            values = list(value)
            if p.required and not values:
                raise ValueError(f"{p.name} must not be empty")
            parameters.extend((key, v) for v in values)
        else:
            parameters.append((key, value))
    return parameters


#---------------------------------------------------------------------------#
#   Declaration table                                                       #
#---------------------------------------------------------------------------#


_FILTER = optional("filter", default="for_ios")

RESOURCES = {
    "illust": (
        Endpoint(
            "detail", "GET", "/v1/illust/detail",
            (required("illust_id"),),
            doc="Illust detail.",
        ),
        Endpoint(
            "recommended", "GET", "/v1/illust/recommended",
            (
                optional("content_type", default="illust"),
                optional("include_ranking_label", default=True),
                optional("max_bookmark_id_for_recommend"),
                optional("min_bookmark_id_for_recent_illust"),
                optional("offset"),
                _FILTER,
            ),
            items_key="illusts",
            doc="Recommended illusts or manga.",
        ),
        Endpoint(
            "ranking", "GET", "/v1/illust/ranking",
            (
                optional("mode", default="day"),
                optional("date"),
                optional("offset"),
                _FILTER,
            ),
            items_key="illusts",
            requires_auth=False,
            doc="Illust ranking, date as YYYY-MM-DD.",
        ),
        Endpoint(
            "related", "GET", "/v2/illust/related",
            (required("illust_id"), multi("seed_illust_ids"), _FILTER),
            items_key="illusts",
            doc="Illusts related to one illust.",
        ),
        Endpoint(
            "follow", "GET", "/v2/illust/follow",
            (optional("restrict", default="public"), optional("offset")),
            items_key="illusts",
            doc="New illusts from followed users.",
        ),
        Endpoint(
            "bookmark_detail", "GET", "/v2/illust/bookmark/detail",
            (required("illust_id"),),
            doc="Bookmark state and tags of an illust.",
        ),
        Endpoint(
            "bookmark_users", "GET", "/v1/illust/bookmark/users",
            (required("illust_id"), optional("offset")),
            items_key="users",
            doc="Users who bookmarked an illust.",
        ),
        Endpoint(
            "bookmark_add", "POST", "/v2/illust/bookmark/add",
            (
                required("illust_id"),
                optional("restrict", default="public"),
                multi("tags"),
            ),
            doc="Bookmark an illust.",
        ),
        Endpoint(
            "bookmark_delete", "POST", "/v1/illust/bookmark/delete",
            (required("illust_id"),),
            doc="Remove an illust bookmark.",
        ),
        Endpoint(
            "ugoira_metadata", "GET", "/v1/ugoira/metadata",
            (required("illust_id"),),
            doc="Frames of an ugoira.",
        ),
    ),
    "manga": (
        Endpoint(
            "recommended", "GET", "/v1/manga/recommended",
            (
                optional("include_ranking_label", default=True),
                optional("max_bookmark_id_for_recommend"),
                optional("offset"),
                _FILTER,
            ),
            items_key="illusts",
            doc="Recommended manga.",
        ),
        Endpoint(
            "watchlist", "GET", "/v1/watchlist/manga",
            (optional("offset"),),
            items_key="series",
            doc="Manga series on the watchlist.",
        ),
    ),
    "illust_series": (
        Endpoint(
            "detail", "GET", "/v1/illust/series",
            (required("illust_series_id"), optional("offset"), _FILTER),
            items_key="illusts",
            doc="Illusts of a series, series info under raw.",
        ),
        Endpoint(
            "illust", "GET", "/v1/illust-series/illust",
            (required("illust_id"), _FILTER),
            doc="Series context of one illust.",
        ),
    ),
    "live": (
        Endpoint(
            "list", "GET", "/v1/live/list",
            (optional("list_type", default="popular"), optional("offset")),
            items_key="lives",
            doc="Ongoing pixiv Sketch lives.",
        ),
    ),
    "novel": (
        Endpoint(
            "detail", "GET", "/v2/novel/detail",
            (required("novel_id"),),
            doc="Novel detail.",
        ),
        Endpoint(
            "text", "GET", "/v1/novel/text",
            (required("novel_id"),),
            doc="Novel text.",
        ),
        Endpoint(
            "recommended", "GET", "/v1/novel/recommended",
            (
                optional("include_ranking_novels", default=True),
                optional("already_recommended"),
                optional("max_bookmark_id_for_recommend"),
                optional("offset"),
            ),
            items_key="novels",
            doc="Recommended novels.",
        ),
        Endpoint(
            "ranking", "GET", "/v1/novel/ranking",
            (optional("mode", default="day"), optional("date"),
             optional("offset")),
            items_key="novels",
            doc="Novel ranking.",
        ),
        Endpoint(
            "follow", "GET", "/v1/novel/follow",
            (optional("restrict", default="public"), optional("offset")),
            items_key="novels",
            doc="New novels from followed users.",
        ),
        Endpoint(
            "series", "GET", "/v2/novel/series",
            (required("series_id"), optional("last_order")),
            items_key="novels",
            doc="Novels of a series.",
        ),
        Endpoint(
            "bookmark_add", "POST", "/v2/novel/bookmark/add",
            (
                required("novel_id"),
                optional("restrict", default="public"),
                multi("tags"),
            ),
            doc="Bookmark a novel.",
        ),
        Endpoint(
            "bookmark_delete", "POST", "/v1/novel/bookmark/delete",
            (required("novel_id"),),
            doc="Remove a novel bookmark.",
        ),
    ),
    "search": (
        Endpoint(
            "illust", "GET", "/v1/search/illust",
            (
                required("word"),
                optional("search_target", default="partial_match_for_tags"),
                optional("sort", default="date_desc"),
                optional("duration"),
                optional("start_date"),
                optional("end_date"),
                optional("offset"),
                _FILTER,
            ),
            items_key="illusts",
            doc="Search illusts.",
        ),
        Endpoint(
            "novel", "GET", "/v1/search/novel",
            (
                required("word"),
                optional("search_target", default="partial_match_for_tags"),
                optional("sort", default="date_desc"),
                optional("merge_plain_keyword_results", default=True),
                optional("include_translated_tag_results", default=True),
                optional("offset"),
            ),
            items_key="novels",
            doc="Search novels.",
        ),
        Endpoint(
            "user", "GET", "/v1/search/user",
            (required("word"), optional("offset"), _FILTER),
            items_key="user_previews",
            doc="Search users.",
        ),
        Endpoint(
            "autocomplete", "GET", "/v2/search/autocomplete",
            (required("word"), optional("merge_plain_keyword_results",
                                        default=True)),
            doc="Tag suggestions for a partial word.",
        ),
    ),
    "user": (
        Endpoint(
            "detail", "GET", "/v1/user/detail",
            (required("user_id"), _FILTER),
            doc="User profile.",
        ),
        Endpoint(
            "illusts", "GET", "/v1/user/illusts",
            (required("user_id"), optional("type", default="illust"),
             optional("offset"), _FILTER),
            items_key="illusts",
            doc="Illusts posted by a user.",
        ),
        Endpoint(
            "novels", "GET", "/v1/user/novels",
            (required("user_id"), optional("offset")),
            items_key="novels",
            doc="Novels posted by a user.",
        ),
        Endpoint(
            "bookmarks_illust", "GET", "/v1/user/bookmarks/illust",
            (
                required("user_id"),
                optional("restrict", default="public"),
                optional("tag"),
                optional("max_bookmark_id"),
                _FILTER,
            ),
            items_key="illusts",
            doc="Illusts bookmarked by a user.",
        ),
        Endpoint(
            "bookmarks_novel", "GET", "/v1/user/bookmarks/novel",
            (
                required("user_id"),
                optional("restrict", default="public"),
                optional("tag"),
                optional("max_bookmark_id"),
            ),
            items_key="novels",
            doc="Novels bookmarked by a user.",
        ),
        Endpoint(
            "bookmark_tags_illust", "GET", "/v1/user/bookmark-tags/illust",
            (optional("restrict", default="public"), optional("offset")),
            items_key="bookmark_tags",
            doc="Own illust bookmark tags.",
        ),
        Endpoint(
            "following", "GET", "/v1/user/following",
            (required("user_id"), optional("restrict", default="public"),
             optional("offset")),
            items_key="user_previews",
            doc="Users followed by a user.",
        ),
        Endpoint(
            "follower", "GET", "/v1/user/follower",
            (required("user_id"), optional("offset"), _FILTER),
            items_key="user_previews",
            doc="Followers of a user.",
        ),
        Endpoint(
            "recommended", "GET", "/v1/user/recommended",
            (optional("offset"), _FILTER),
            items_key="user_previews",
            doc="Recommended users.",
        ),
        Endpoint(
            "follow_add", "POST", "/v1/user/follow/add",
            (required("user_id"), optional("restrict", default="public")),
            doc="Follow a user.",
        ),
        Endpoint(
            "follow_delete", "POST", "/v1/user/follow/delete",
            (required("user_id"),),
            doc="Unfollow a user.",
        ),
    ),
    "browsing_history": (
        Endpoint(
            "illusts", "GET", "/v1/user/browsing-history/illusts",
            (optional("offset"),),
            items_key="illusts",
            doc="Recently viewed illusts.",
        ),
        Endpoint(
            "novels", "GET", "/v1/user/browsing-history/novels",
            (optional("offset"),),
            items_key="novels",
            doc="Recently viewed novels.",
        ),
        Endpoint(
            "add_illusts", "POST", "/v2/user/browsing-history/illust/add",
            (multi("illust_ids", required=True),),
            doc="Record illusts as viewed.",
        ),
        Endpoint(
            "add_novels", "POST", "/v2/user/browsing-history/novel/add",
            (multi("novel_ids", required=True),),
            doc="Record novels as viewed.",
        ),
    ),
    "spotlight": (
        Endpoint(
            "articles", "GET", "/v1/spotlight/articles",
            (optional("category", default="all"), optional("offset"),
             _FILTER),
            items_key="spotlight_articles",
            requires_auth=False,
            doc="pixivision (spotlight) articles.",
        ),
    ),
    "notification": (
        Endpoint(
            "list", "GET", "/v1/notification/list",
            (optional("offset"),),
            items_key="notifications",
            doc="Notifications.",
        ),
        Endpoint(
            "has_unread", "GET", "/v1/notification/has-unread-notifications",
            doc="Whether unread notifications exist.",
        ),
    ),
    "mute": (
        Endpoint(
            "list", "GET", "/v1/mute/list",
            doc="Muted users and tags.",
        ),
        Endpoint(
            "edit", "POST", "/v1/mute/edit",
            (
                multi("add_user_ids"),
                multi("delete_user_ids"),
                multi("add_tags"),
                multi("delete_tags"),
            ),
            doc="Add or remove muted users and tags.",
        ),
    ),
    "trending_tags": (
        Endpoint(
            "illust", "GET", "/v1/trending-tags/illust",
            (_FILTER,),
            doc="Trending illust tags.",
        ),
        Endpoint(
            "novel", "GET", "/v1/trending-tags/novel",
            (_FILTER,),
            doc="Trending novel tags.",
        ),
    ),
    "walkthrough": (
        Endpoint(
            "illusts", "GET", "/v1/walkthrough/illusts",
            items_key="illusts",
            requires_auth=False,
            doc="Illusts shown before login.",
        ),
    ),
    "application_info": (
        Endpoint(
            "ios", "GET", "/v1/application-info/ios",
            requires_auth=False,
            doc="Latest app version information.",
        ),
    ),
}


def find_endpoint(group, name):
    """
    Look up an endpoint of the table.

    Raises:
        KeyError
            Unknown group or endpoint.
    """
    for ep in RESOURCES[group]:
        if ep.name == name:
            return ep
    raise KeyError(f"{group}.{name}")
