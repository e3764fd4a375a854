"""
Counter Table Sequences
Each sequence keeps one row holding the last number it handed out.
The asset ID managers build their VH/EQ/FU ids on top of these numbers.
"""

import threading
from abc import ABC, abstractmethod

from sqlalchemy import Column, Integer, MetaData, Table, func, insert, select, update

from gsa_registry import db

# Counter tables live outside db.metadata so create_all/drop_all and migrations leave them alone
_counter_metadata = MetaData()
_declare_lock = threading.Lock()


class VirtualSequenceGenerator(ABC):
    """
    Abstract numbered sequence backed by a single-row counter table.
    Subclasses only name the table.
    """

    _lock = threading.Lock()

    @classmethod
    @abstractmethod
    def get_sequence_table_name(cls):
        """Name of the counter table behind this sequence"""
        pass

    @classmethod
    def _counter_table(cls) -> Table:
        name = cls.get_sequence_table_name()
        with _declare_lock:
            table = _counter_metadata.tables.get(name)
            if table is None:
                table = Table(
                    name,
                    _counter_metadata,
                    Column('id', Integer, primary_key=True),
                    Column('current_value', Integer, nullable=False, default=0),
                )
        return table

    @classmethod
    def get_next_id(cls) -> int:
        """
        Bump the counter and return the new number.
        The bump joins the caller's transaction, so a rolled back insert gives its number back.
        """
        counter = cls._counter_table()
        with cls._lock:
            db.session.execute(update(counter).values(current_value=counter.c.current_value + 1))
            return db.session.execute(select(counter.c.current_value)).scalar()

    @classmethod
    def create_sequence_if_not_exists(cls, start_value=0):
        """
        Create the counter table and its row on first use.

        Args:
            start_value (int): Counter value for a new row; the first id handed out is start_value + 1
        """
        counter = cls._counter_table()
        try:
            counter.create(db.session.connection(), checkfirst=True)
            if not db.session.execute(select(func.count()).select_from(counter)).scalar():
                db.session.execute(insert(counter).values(current_value=int(start_value)))
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    @classmethod
    def reset_sequence(cls, start_value=1):
        """Rewind or skip ahead so the next number handed out is start_value"""
        counter = cls._counter_table()
        with cls._lock:
            db.session.execute(update(counter).values(current_value=int(start_value) - 1))
            db.session.commit()

    @classmethod
    def get_current_sequence_value(cls) -> int:
        counter = cls._counter_table()
        return db.session.execute(select(counter.c.current_value)).scalar()
