"""Shared fixtures: throwaway project trees."""

import textwrap
from pathlib import Path

import pytest


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write ``relative path -> contents`` entries under root."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path):
    """Return a helper that writes files into tmp_path and returns it."""

    def _make(files: dict[str, str]) -> Path:
        return write_tree(tmp_path, files)

    return _make


@pytest.fixture
def react_repo(tmp_path):
    """A small TypeScript React project."""
    return write_tree(tmp_path, {
        "package.json": '{"name": "web", "devDependencies": {"typescript": "^5.0.0"}}',
        "src/components/Modal.tsx": """
            import React, { useEffect } from 'react';
            import { createPortal } from 'react-dom';

            export function Modal({ onClose, children }) {
              useEffect(() => {
                const handler = (e) => e.key === 'escape' && onClose();
                return () => handler;
              }, [onClose]);
              return createPortal(
                <div className="backdrop">{children}</div>,
                document.body
              );
            }
        """,
        "src/components/Button.tsx": """
            import styled from 'styled-components';

            const Wrapper = styled.button``;

            export function Button({ label, onClick }) {
              return <Wrapper onClick={onClick}>{label}</Wrapper>;
            }
        """,
        "src/services/UserService.ts": """
            import axios from 'axios';
            import { User } from '../domain/User';

            export class UserService {
              async load(id) {
                return axios.get(`/users/${id}`);
              }
            }
        """,
        "README.md": "# Web\n",
        "node_modules/react/index.js": "export function Ignored() {}\n",
    })
