from registry.domain.asset import CryptoAsset
from registry.repository.statements import (
    build_select_statement,
    build_update_statement,
    insert_asset_args,
)

SELECT_PREFIX = (
    "SELECT a.id AS id, a.name AS name, a.symbol AS symbol, a.description AS description, "
    "a.icoAmount AS icoAmount, a.blockReward AS blockReward, a.fundingStatus AS fundingStatus, "
    "a.foundedDate AS foundedDate, a.coinType AS coinType, a.website AS website, t.name AS teamMember "
    "FROM asset a LEFT JOIN team_member t ON a.id = t.assetId"
)
ORDER = " ORDER BY a.id, t.rowid"


def test_select_mixed_filters_skip_empty_sets():
    stmt = build_select_statement(["Bitcoin", "Ethereum"], ["BTC"], [], [], "2009-01-03", "2018-01-18")
    assert stmt.sql == (
        SELECT_PREFIX + " WHERE (a.name = ? OR a.name = ?) AND (a.symbol = ?) "
        "AND a.foundedDate >= ? AND a.foundedDate <= ?" + ORDER
    )
    assert stmt.args == ["Bitcoin", "Ethereum", "BTC", "2009-01-03", "2018-01-18"]


def test_select_all_filters_in_fixed_order():
    args = ["Bitcoin", "Ethereum", "Bluzelle", "BTC", "ETH", "BLZ", "NO_ICO", "POST_ICO", "Currency",
            "Platform", "Storage", "2009-01-03", "2018-01-18"]
    stmt = build_select_statement(args[0:3], args[3:6], args[6:8], args[8:11], args[11], args[12])
    assert stmt.sql == (
        SELECT_PREFIX + " WHERE (a.name = ? OR a.name = ? OR a.name = ?) AND "
        "(a.symbol = ? OR a.symbol = ? OR a.symbol = ?) AND "
        "(a.fundingStatus = ? OR a.fundingStatus = ?) AND "
        "(a.coinType = ? OR a.coinType = ? OR a.coinType = ?) AND "
        "a.foundedDate >= ? AND a.foundedDate <= ?" + ORDER
    )
    assert stmt.args == args


def test_select_without_filters_matches_all():
    stmt = build_select_statement([], [], [], [], None, "")
    assert stmt.sql == SELECT_PREFIX + ORDER
    assert stmt.args == []


def test_select_first_present_clause_gets_where():
    stmt = build_select_statement([], [], [], ["platform"], None, "2018-01-18")
    assert stmt.sql == SELECT_PREFIX + " WHERE (a.coinType = ?) AND a.foundedDate <= ?" + ORDER
    assert stmt.args == ["platform", "2018-01-18"]


def test_update_single_field():
    stmt = build_update_statement(3, CryptoAsset(symbol="ant"))
    assert stmt.sql == "UPDATE asset SET symbol = ? WHERE id = ?"
    assert stmt.args == ["ant", 3]


def test_update_all_fields_in_fixed_order():
    asset = CryptoAsset(
        website="https://bitcoin.org/en/",
        coin_type="currency",
        founded_date="2009-01-03",
        funding_status="no-ico",
        block_reward=12.5,
        ico_amount=0.0,
        description="The original cryptocurrency",
        symbol="btc",
        name="bitcoin",
        team=["ignored here"],
    )
    stmt = build_update_statement(1, asset)
    assert stmt.sql == (
        "UPDATE asset SET name = ?, symbol = ?, description = ?, icoAmount = ?, blockReward = ?, "
        "fundingStatus = ?, foundedDate = ?, coinType = ?, website = ? WHERE id = ?"
    )
    assert stmt.args == ["bitcoin", "btc", "The original cryptocurrency", 0.0, 12.5, "no-ico", "2009-01-03",
                         "currency", "https://bitcoin.org/en/", 1]


def test_update_zero_values_are_present():
    stmt = build_update_statement(9, CryptoAsset(ico_amount=0.0, description=""))
    assert stmt.sql == "UPDATE asset SET description = ?, icoAmount = ? WHERE id = ?"
    assert stmt.args == ["", 0.0, 9]


def test_update_nothing_to_update():
    assert build_update_statement(3, CryptoAsset()) is None
    # a team alone is not a scalar update
    assert build_update_statement(3, CryptoAsset(team=[])) is None


def test_insert_args_bind_null_for_missing_fields():
    args = insert_asset_args(CryptoAsset(name="bitcoin", block_reward=12.5))
    assert args == ["bitcoin", None, None, None, 12.5, None, None, None, None]
