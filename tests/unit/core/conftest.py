"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_POST = """\
---
template: post
title: Hello World
description: A first post
slug: hello-world
author: Jo Writer
date: 2023-05-15
tags: [python, blog, python]
---

Intro paragraph.

## Getting Started

![Cover](/images/cover.jpg)

## Summary

Text.

## Summary

More text.
"""


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST
