"""Core components for the Meshtastic Gopher client."""

from .command_parser import (
    CommandParser,
    Command,
    SelectCommand,
    BackCommand,
    HomeCommand,
    NextCommand,
    PreviousCommand,
    StopCommand,
    HistoryCommand,
    HelpCommand,
    GoCommand,
    QueryCommand,
    InvalidCommand,
)
from .entry import DirectoryEntry, Listing
from .fetch_client import ContentKind, FetchClient, FetchHandle, FetchRequest
from .item_types import Category, ItemTypeInfo, classify
from .menu_parser import parse_listing, split_document
from .menu_renderer import MenuRenderer
from .message_splitter import MessageSplitter
from .navigation import NavigationEngine
from .paginator import Page, PaginationState, paginate
from .session import HistoryFrame, NavigationState, View
from .session_manager import SessionManager
from .url_parser import format_url, parse as parse_url

__all__ = [
    "CommandParser",
    "Command",
    "SelectCommand",
    "BackCommand",
    "HomeCommand",
    "NextCommand",
    "PreviousCommand",
    "StopCommand",
    "HistoryCommand",
    "HelpCommand",
    "GoCommand",
    "QueryCommand",
    "InvalidCommand",
    "DirectoryEntry",
    "Listing",
    "ContentKind",
    "FetchClient",
    "FetchHandle",
    "FetchRequest",
    "Category",
    "ItemTypeInfo",
    "classify",
    "parse_listing",
    "split_document",
    "MenuRenderer",
    "MessageSplitter",
    "NavigationEngine",
    "Page",
    "PaginationState",
    "paginate",
    "HistoryFrame",
    "NavigationState",
    "View",
    "SessionManager",
    "format_url",
    "parse_url",
]
