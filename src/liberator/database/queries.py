"""Parameterized SQL templates against the Voyager schema.

Each template is one logical lookup. Parameters are always bound, never
interpolated; typed result columns make date handling uniform across the
Oracle driver and the SQLite mirror used in tests.
"""

from sqlalchemy import DateTime, Integer, String, text

# Withdrawn, missing, lost, claims returned and similar terminal item states.
EXCLUDED_ITEM_STATUSES = (5, 6, 16, 19, 20, 21, 23, 24)

_EXCLUDED = ", ".join(str(code) for code in EXCLUDED_ITEM_STATUSES)

# Excluded status rows are filtered individually; an item stays visible while
# any of its other status rows remains.
_HAS_CIRCULATING_STATUS = f"""
  EXISTS (
    SELECT 1 FROM item_status circulating
    WHERE circulating.item_id = item.item_id
      AND circulating.item_status NOT IN ({_EXCLUDED})
  )
"""

_NOT_EXCLUDED_STATUS_ROW = f"item_status.item_status NOT IN ({_EXCLUDED})"

BIB_SUPPRESSED = text(
    """
    SELECT suppress_in_opac FROM bib_master
    WHERE bib_id = :bib_id
    """
)

MFHD_SUPPRESSED = text(
    """
    SELECT suppress_in_opac FROM mfhd_master
    WHERE mfhd_id = :mfhd_id
    """
)

BIB_SEGMENTS = text(
    """
    SELECT record_segment FROM bib_data
    WHERE bib_id = :bib_id
    ORDER BY seqnum
    """
)

MFHD_SEGMENTS = text(
    """
    SELECT record_segment FROM mfhd_data
    WHERE mfhd_id = :mfhd_id
    ORDER BY seqnum
    """
)

MFHD_IDS = text(
    """
    SELECT mfhd_id FROM bib_mfhd
    WHERE bib_id = :bib_id
    """
).columns(mfhd_id=Integer)

BIB_CREATE_DATE = text(
    """
    SELECT create_date FROM bib_master
    WHERE bib_id = :bib_id
    """
).columns(create_date=DateTime)

ITEM_CREATE_DATE = text(
    """
    SELECT create_date FROM item
    WHERE item_id = :item_id
    """
).columns(create_date=DateTime)

# Every item attached to the holding, regardless of status.
MFHD_ALL_ITEM_IDS = text(
    """
    SELECT item_id FROM mfhd_item
    WHERE mfhd_id = :mfhd_id
    ORDER BY item_id
    """
).columns(item_id=Integer)

# Items that can circulate, most relevant (highest sequence number) first.
MFHD_ITEM_IDS = text(
    f"""
    SELECT mfhd_item.item_id
    FROM mfhd_item
      INNER JOIN item
        ON item.item_id = mfhd_item.item_id
    WHERE mfhd_item.mfhd_id = :mfhd_id
      AND {_HAS_CIRCULATING_STATUS}
    ORDER BY
      CASE WHEN item.item_sequence_number IS NULL THEN 1 ELSE 0 END,
      item.item_sequence_number DESC,
      mfhd_item.item_id
    """
).columns(item_id=Integer)

FULL_ITEM_INFO = text(
    f"""
    SELECT
      item.item_id,
      item_status_type.item_status_desc,
      item.on_reserve,
      temp_loc.location_code AS temp_location,
      perm_loc.location_code AS perm_location,
      mfhd_item.item_enum,
      mfhd_item.chron,
      item.copy_number,
      item.item_sequence_number,
      item_status.item_status_date,
      item_barcode.item_barcode,
      item.create_date
    FROM item
      INNER JOIN location perm_loc
        ON perm_loc.location_id = item.perm_location
      LEFT JOIN location temp_loc
        ON temp_loc.location_id = item.temp_location
      INNER JOIN item_status
        ON item_status.item_id = item.item_id
      INNER JOIN item_status_type
        ON item_status_type.item_status_type = item_status.item_status
      INNER JOIN mfhd_item
        ON mfhd_item.item_id = item.item_id
      LEFT JOIN item_barcode
        ON item_barcode.item_id = item.item_id AND item_barcode.barcode_status = 1
    WHERE item.item_id = :item_id
      AND {_NOT_EXCLUDED_STATUS_ROW}
    ORDER BY
      CASE WHEN item_status.item_status_date IS NULL THEN 1 ELSE 0 END,
      item_status.item_status_date DESC
    """
).columns(
    item_id=Integer,
    item_status_desc=String,
    on_reserve=String,
    temp_location=String,
    perm_location=String,
    item_enum=String,
    chron=String,
    copy_number=Integer,
    item_sequence_number=Integer,
    item_status_date=DateTime,
    item_barcode=String,
    create_date=DateTime,
)

BRIEF_ITEM_INFO = text(
    f"""
    SELECT
      item.item_id,
      item_status_type.item_status_desc,
      item.on_reserve,
      temp_loc.location_code AS temp_location,
      perm_loc.location_code AS perm_location
    FROM item
      INNER JOIN location perm_loc
        ON perm_loc.location_id = item.perm_location
      LEFT JOIN location temp_loc
        ON temp_loc.location_id = item.temp_location
      INNER JOIN item_status
        ON item_status.item_id = item.item_id
      INNER JOIN item_status_type
        ON item_status_type.item_status_type = item_status.item_status
    WHERE item.item_id = :item_id
      AND {_NOT_EXCLUDED_STATUS_ROW}
    ORDER BY
      CASE WHEN item_status.item_status_date IS NULL THEN 1 ELSE 0 END,
      item_status.item_status_date DESC
    """
).columns(
    item_id=Integer,
    item_status_desc=String,
    on_reserve=String,
    temp_location=String,
    perm_location=String,
)

ITEM_STATUSES = text(
    """
    SELECT item_status_type, item_status_desc
    FROM item_status_type
    """
).columns(item_status_type=Integer, item_status_desc=String)

ALL_LOCATIONS = text(
    """
    SELECT location_id, location_code, location_display_name, suppress_in_opac
    FROM location
    ORDER BY location_id
    """
).columns(
    location_id=Integer,
    location_code=String,
    location_display_name=String,
    suppress_in_opac=String,
)

# Most recent order line first; lines without a status date sort last.
ORDERS = text(
    """
    SELECT
      line_item.bib_id,
      purchase_order.po_status,
      line_item_copy_status.line_item_status,
      line_item_copy_status.status_date
    FROM purchase_order
      INNER JOIN line_item
        ON purchase_order.po_id = line_item.po_id
      INNER JOIN line_item_copy_status
        ON line_item.line_item_id = line_item_copy_status.line_item_id
    WHERE line_item.bib_id = :bib_id
    ORDER BY
      CASE WHEN line_item_copy_status.status_date IS NULL THEN 1 ELSE 0 END,
      line_item_copy_status.status_date DESC
    """
).columns(bib_id=Integer, po_status=Integer, line_item_status=Integer, status_date=DateTime)

CURRENT_PERIODICALS = text(
    """
    SELECT serial_issues.enumchron
    FROM line_item
      INNER JOIN line_item_copy_status
        ON line_item.line_item_id = line_item_copy_status.line_item_id
      INNER JOIN subscription
        ON line_item_copy_status.line_item_id = subscription.line_item_id
      INNER JOIN component
        ON subscription.subscription_id = component.subscription_id
      INNER JOIN issues_received
        ON component.component_id = issues_received.component_id
      INNER JOIN serial_issues
        ON issues_received.component_id = serial_issues.component_id
       AND issues_received.issue_id = serial_issues.issue_id
    WHERE line_item_copy_status.mfhd_id = :mfhd_id
      AND serial_issues.received = 1
      AND issues_received.opac_suppressed = 1
    GROUP BY line_item_copy_status.mfhd_id, serial_issues.enumchron
    """
).columns(enumchron=String)

_PATRON_INFO = """
    SELECT
      patron.title AS netid,
      patron.first_name,
      patron.last_name,
      patron_barcode.patron_barcode,
      patron_barcode.barcode_status,
      patron_barcode.barcode_status_date,
      patron.institution_id,
      patron_barcode.patron_group_id,
      patron.purge_date,
      patron.expire_date,
      patron.patron_id
    FROM patron
      INNER JOIN patron_barcode
        ON patron.patron_id = patron_barcode.patron_id
    WHERE {id_column} = :patron_id
      AND patron_barcode.barcode_status = 1
"""

_PATRON_COLUMNS = dict(
    netid=String,
    first_name=String,
    last_name=String,
    patron_barcode=String,
    barcode_status=Integer,
    barcode_status_date=DateTime,
    institution_id=String,
    patron_group_id=Integer,
    purge_date=DateTime,
    expire_date=DateTime,
    patron_id=Integer,
)

PATRON_INFO_BY_BARCODE = text(
    _PATRON_INFO.format(id_column="patron_barcode.patron_barcode")
).columns(**_PATRON_COLUMNS)

PATRON_INFO_BY_INSTITUTION_ID = text(
    _PATRON_INFO.format(id_column="patron.institution_id")
).columns(**_PATRON_COLUMNS)

PATRON_INFO_BY_NETID = text(
    _PATRON_INFO.format(id_column="patron.title")
).columns(**_PATRON_COLUMNS)
