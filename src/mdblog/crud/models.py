"""Database table definitions for the post store and the SEO audit store"""

from typing import List, Optional

from sqlalchemy import Column, JSON, Text
from sqlmodel import Field, SQLModel


class Post(SQLModel, table=True):
    """A transformed post; rebuilt from the sources on every run"""
    __tablename__ = "posts"
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(default="", sa_column=Column(Text, nullable=False))
    content: str = Field(default="", sa_column=Column(Text, nullable=False))
    pub_date: str = Field(default="", index=True, description="YYYY-MM-DD publish date")
    headings: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    slug: str = Field(..., index=True, nullable=False, description="YYYY/MM/DD/<slug field>")
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    description: str = Field(default="", sa_column=Column(Text, nullable=False))
    author: str = Field(default="", sa_column=Column(Text, nullable=False))
    template: str = Field(default="", sa_column=Column(Text, nullable=False))
    image: str = Field(default="", sa_column=Column(Text, nullable=False), description="First image src, may be empty")


class SEORecord(SQLModel, table=True):
    """Extracted metadata and validated outbound links of one rendered HTML file"""
    __tablename__ = "seo"
    id: Optional[int] = Field(default=None, primary_key=True)
    path: str = Field(..., index=True, nullable=False)
    title: str = Field(default="", sa_column=Column(Text, nullable=False))
    meta_description: str = Field(default="", sa_column=Column(Text, nullable=False))
    links: str = Field(default="", sa_column=Column(Text, nullable=False), description="Valid links joined by ', '")

    def link_list(self) -> list[str]:
        return self.links.split(", ") if self.links else []
