"""Declarative mirror of the Voyager tables read by the engine.

Production reads the live Voyager Oracle schema; these models let a local
mirror (and the test suite) be created with the same table and column names.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    Integer,
    LargeBinary,
    String,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class BibMaster(Base):
    __tablename__ = "bib_master"

    bib_id = Column(Integer, primary_key=True)
    suppress_in_opac = Column(String(1), nullable=False, default="N")  # Y | N
    create_date = Column(DateTime, nullable=True)
    update_date = Column(DateTime, nullable=True)


class BibData(Base):
    """One raw ISO 2709 segment of a bib record; segments join in seqnum order."""
    __tablename__ = "bib_data"

    bib_id = Column(Integer, primary_key=True)
    seqnum = Column(Integer, primary_key=True)
    record_segment = Column(LargeBinary, nullable=False)


class MfhdMaster(Base):
    __tablename__ = "mfhd_master"

    mfhd_id = Column(Integer, primary_key=True)
    location_id = Column(Integer, nullable=True)
    suppress_in_opac = Column(String(1), nullable=False, default="N")  # Y | N
    create_date = Column(DateTime, nullable=True)
    update_date = Column(DateTime, nullable=True)


class MfhdData(Base):
    __tablename__ = "mfhd_data"

    mfhd_id = Column(Integer, primary_key=True)
    seqnum = Column(Integer, primary_key=True)
    record_segment = Column(LargeBinary, nullable=False)


class BibMfhd(Base):
    __tablename__ = "bib_mfhd"

    bib_id = Column(Integer, primary_key=True)
    mfhd_id = Column(Integer, primary_key=True)


class Location(Base):
    __tablename__ = "location"

    location_id = Column(Integer, primary_key=True)
    location_code = Column(String, nullable=False, index=True)
    location_display_name = Column(String, nullable=True)
    suppress_in_opac = Column(String(1), nullable=False, default="N")


class Item(Base):
    __tablename__ = "item"

    item_id = Column(Integer, primary_key=True)
    perm_location = Column(Integer, nullable=False)  # location.location_id
    temp_location = Column(Integer, nullable=True)  # location.location_id
    on_reserve = Column(String(1), nullable=False, default="N")  # Y | N
    copy_number = Column(Integer, nullable=True)
    item_sequence_number = Column(Integer, nullable=True)
    create_date = Column(DateTime, nullable=True)


class ItemStatus(Base):
    """Items may carry several status rows at once."""
    __tablename__ = "item_status"

    item_id = Column(Integer, primary_key=True)
    item_status = Column(Integer, primary_key=True)  # item_status_type.item_status_type
    item_status_date = Column(DateTime, nullable=True)


class ItemStatusType(Base):
    __tablename__ = "item_status_type"

    item_status_type = Column(Integer, primary_key=True)
    item_status_desc = Column(String, nullable=False)


class MfhdItem(Base):
    __tablename__ = "mfhd_item"

    item_id = Column(Integer, primary_key=True)
    mfhd_id = Column(Integer, nullable=False, index=True)
    item_enum = Column(String, nullable=True)
    chron = Column(String, nullable=True)


class ItemBarcode(Base):
    __tablename__ = "item_barcode"

    item_id = Column(Integer, primary_key=True)
    item_barcode = Column(String, primary_key=True)
    barcode_status = Column(Integer, nullable=False, default=1)  # 1 = active


class PurchaseOrder(Base):
    __tablename__ = "purchase_order"

    po_id = Column(Integer, primary_key=True)
    po_status = Column(Integer, nullable=False)


class LineItem(Base):
    __tablename__ = "line_item"

    line_item_id = Column(Integer, primary_key=True)
    po_id = Column(Integer, nullable=False, index=True)
    bib_id = Column(Integer, nullable=False, index=True)


class LineItemCopyStatus(Base):
    __tablename__ = "line_item_copy_status"

    copy_id = Column(Integer, primary_key=True)
    line_item_id = Column(Integer, nullable=False, index=True)
    mfhd_id = Column(Integer, nullable=True, index=True)
    line_item_status = Column(Integer, nullable=False)
    status_date = Column(DateTime, nullable=True)


class Subscription(Base):
    __tablename__ = "subscription"

    subscription_id = Column(Integer, primary_key=True)
    line_item_id = Column(Integer, nullable=False, index=True)


class Component(Base):
    __tablename__ = "component"

    component_id = Column(Integer, primary_key=True)
    subscription_id = Column(Integer, nullable=False, index=True)


class IssuesReceived(Base):
    __tablename__ = "issues_received"

    issue_id = Column(Integer, primary_key=True)
    component_id = Column(Integer, primary_key=True)
    opac_suppressed = Column(Integer, nullable=False, default=1)


class SerialIssues(Base):
    __tablename__ = "serial_issues"

    issue_id = Column(Integer, primary_key=True)
    component_id = Column(Integer, primary_key=True)
    enumchron = Column(String, nullable=True)
    received = Column(Integer, nullable=False, default=0)


class Patron(Base):
    __tablename__ = "patron"

    patron_id = Column(Integer, primary_key=True)
    title = Column(String, nullable=True)  # holds the net id
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    institution_id = Column(String, nullable=True, index=True)
    purge_date = Column(DateTime, nullable=True)
    expire_date = Column(DateTime, nullable=True)


class PatronBarcode(Base):
    __tablename__ = "patron_barcode"

    patron_barcode_id = Column(Integer, primary_key=True)
    patron_id = Column(Integer, nullable=False)
    patron_barcode = Column(String, nullable=True)
    barcode_status = Column(Integer, nullable=False, default=1)  # 1 = active
    barcode_status_date = Column(DateTime, nullable=True)
    patron_group_id = Column(Integer, nullable=True)

    __table_args__ = (
        Index("idx_patron_barcode_patron", "patron_id", "barcode_status"),
    )
