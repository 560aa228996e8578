from petits_plats.search.trie import Trie


class TestInsert:
    def test_insert_is_idempotent(self):
        once = Trie.from_words(["pomme"])
        twice = Trie.from_words(["pomme", "pomme"])
        assert once.complete("po") == twice.complete("po") == ["pomme"]
        assert len(twice) == 1

    def test_insert_is_case_insensitive(self):
        trie = Trie()
        trie.insert("Pomme")
        assert trie.complete("POM") == ["pomme"]
        assert "POMME" in trie

    def test_empty_word_is_ignored(self):
        trie = Trie()
        trie.insert("   ")
        assert len(trie) == 0
        assert trie.complete("") == []

    def test_contains_only_whole_words(self):
        trie = Trie.from_words(["tartelettes"])
        assert "tartelettes" in trie
        assert "tarte" not in trie
        assert 42 not in trie


class TestComplete:
    def test_unknown_prefix_returns_empty(self):
        trie = Trie.from_words(["pomme"])
        assert trie.complete("pa") == []
        assert trie.complete("pommes") == []

    def test_empty_prefix_returns_everything(self):
        trie = Trie.from_words(["pomme", "poire", "pêche"])
        assert trie.complete("") == ["pomme", "poire", "pêche"]

    def test_depth_first_order(self):
        trie = Trie.from_words(["tarte", "tartelettes", "tartiflette"])
        assert trie.complete("tart") == ["tarte", "tartelettes", "tartiflette"]

    def test_full_word_prefix_includes_itself(self):
        trie = Trie.from_words(["sucre", "sucre vanillé"])
        assert trie.complete("sucre") == ["sucre", "sucre vanillé"]

    def test_prefix_with_space_walks_phrases(self):
        trie = Trie.from_words(["tarte aux pommes", "tarte au thon"])
        assert trie.complete("tarte aux") == ["tarte aux pommes"]


class TestSubtokens:
    def test_subtoken_surfaces_parent_phrase(self):
        trie = Trie.from_phrases(["apple pie"])
        assert trie.complete("pi") == ["apple pie"]
        assert "pie" not in trie

    def test_separately_inserted_subtoken_comes_first(self):
        trie = Trie.from_phrases(["apple pie"])
        trie.insert("pie")
        assert trie.complete("pi") == ["pie", "apple pie"]

    def test_head_word_is_not_registered_twice(self):
        trie = Trie.from_phrases(["apple pie"])
        assert trie.complete("app") == ["apple pie"]

    def test_shared_subtoken_collects_every_parent(self):
        trie = Trie.from_phrases(["lait de coco", "crème de coco"])
        assert trie.complete("coc") == ["lait de coco", "crème de coco"]

    def test_short_words_are_not_subtokens(self):
        trie = Trie.from_phrases(["lait de coco"])
        assert trie.complete("de") == []

    def test_short_head_word_keeps_first_significant_word(self):
        trie = Trie.from_phrases(["à la crème"])
        assert trie.complete("cr") == ["à la crème"]

    def test_single_word_phrase_has_no_parent_value(self):
        trie = Trie.from_phrases(["sucre"])
        assert trie.complete("suc") == ["sucre"]

    def test_parent_registration_is_idempotent(self):
        trie = Trie()
        trie.insert("moule à tarte")
        trie.insert_as_subtoken_of("moule à tarte", "moule à tarte")
        trie.insert_as_subtoken_of("moule à tarte", "moule à tarte")
        assert trie.complete("tar") == ["moule à tarte"]

    def test_subtoken_does_not_count_as_word(self):
        trie = Trie.from_phrases(["rolling pin"])
        assert len(trie) == 1
