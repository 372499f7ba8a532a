from pathlib import Path

from i18n_audit.config import Config
from i18n_audit.scanner import UsedKey, scan_file_content, scan_source_code


def test_scan_file_content_standard_t_macro():
    content = """
        fn main() {
            println!("测试: {}", t!("greetings.hello"));
            println!("再见: {}", t!("greetings.goodbye"));
        }
        """
    used = scan_file_content(content, "test.rs")
    assert len(used) == 2
    assert used[0].key == "greetings.hello"
    assert used[1].key == "greetings.goodbye"
    assert used[0].line_number == 3
    assert used[0].file_path == "test.rs"
    assert used[0].is_literal is True


def test_scan_file_content_namespaced_t_macro():
    content = """
        fn main() {
            println!("测试: {}", rust_i18n::t!("greetings.hello"));
            println!("欢迎: {}", rust_i18n::t!("user.welcome", name = "张三"));
        }
        """
    used = scan_file_content(content, "test.rs")
    assert len(used) == 2
    keys = [k.key for k in used]
    assert "greetings.hello" in keys
    assert "user.welcome" in keys


def test_scan_file_content_dynamic_key():
    content = """
        fn main() {
            let key = "dynamic.key";
            println!("动态键: {}", t!(key));
        }
        """
    used = scan_file_content(content, "test.rs")
    assert len(used) == 1
    assert used[0].key == "dynamic.key"
    assert used[0].is_literal is False


def test_scan_file_content_with_params():
    content = """
        fn main() {
            println!("欢迎: {}", t!("user.welcome", name = "张三"));
            println!("条目: {}", t!("content.section.item.123", count = 5));
        }
        """
    used = scan_file_content(content, "test.rs")
    assert len(used) == 2
    assert used[0].key == "user.welcome"
    assert used[1].key == "content.section.item.123"


EXAMPLE = """
        use rust_i18n::t;

        // 初始化翻译
        rust_i18n::i18n!("../locales");

        fn main() {
            // 设置当前语言
            rust_i18n::set_locale("zh-CN");
            
            // 示例 1: 使用字面量键
            println!("问候: {}", t!("greetings.hello"));
            println!("再见: {}", t!("greetings.goodbye"));
            
            // 示例 2: 带参数的翻译
            println!("欢迎信息: {}", t!("user.welcome", name = "张三"));
            
            // 示例 3: 动态键
            let key = "dynamic.key";
            println!("动态键: {}", t!(key));
            
            // 示例 4: 使用 format! 构建的动态键
            let section = "section";
            let id = 123;
            // 注意：rust-i18n 需要字面量键，因此这里只是示范如何分析这类情况
            let formatted_key = format!("content.{}.item.{}", section, id);
            println!("格式化动态键: {}", t!("content.section.item.123")); // 正确用法，使用字面量
            println!("(假设的动态键实现): {}", formatted_key); // 这里只是打印，不是实际调用 t!()
        }
        """


def test_scan_rust_i18n_example():
    used = scan_file_content(EXAMPLE, "mini_test.rs")
    assert len(used) >= 4
    keys = [k.key for k in used]
    assert "greetings.hello" in keys
    assert "greetings.goodbye" in keys
    assert "user.welcome" in keys
    assert "content.section.item.123" in keys
    dynamic = [k for k in used if not k.is_literal]
    assert len(dynamic) == 1
    assert dynamic[0].key == "dynamic.key"


def test_lines_with_format_are_skipped():
    content = 'let s = format!("{}", t!("skipped.key"));\nt!("kept.key");\n'
    used = scan_file_content(content, "f.rs")
    assert [k.key for k in used] == ["kept.key"]


def test_dynamic_key_without_definition_is_ignored():
    used = scan_file_content("println!(\"{}\", t!(missing));\n", "f.rs")
    assert used == []


def test_dynamic_key_definition_too_far_back_is_ignored():
    lines = ['let key = "far.away";'] + ["// filler"] * 25 + ["t!(key);"]
    used = scan_file_content("\n".join(lines), "f.rs")
    assert used == []


def test_dynamic_key_uses_nearest_definition():
    content = 'let key = "first";\nlet key = "second";\nt!(key);\n'
    used = scan_file_content(content, "f.rs")
    assert used == [UsedKey("second", False, "f.rs", 3)]


def test_crlf_line_endings():
    content = 'let key = "a.b";\r\nt!(key);\r\n'
    used = scan_file_content(content, "f.rs")
    assert used == [UsedKey("a.b", False, "f.rs", 2)]


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_scan_source_code_walks_tree_and_deduplicates(tmp_path):
    _write(tmp_path / "src" / "main.rs", 't!("a.key");\nt!("b.key");\n')
    _write(tmp_path / "src" / "nested" / "lib.rs", 't!("a.key");\nt!("c.key");\n')
    _write(tmp_path / "src" / "notes.txt", 't!("ignored.key");\n')
    config = Config(project_path=tmp_path)

    used = scan_source_code(config)

    keys = sorted(k.key for k in used)
    assert keys == ["a.key", "b.key", "c.key"]
    by_key = {k.key: k for k in used}
    assert by_key["c.key"].file_path == str(Path("src") / "nested" / "lib.rs")
    assert by_key["c.key"].line_number == 2
    assert by_key["b.key"].file_path == str(Path("src") / "main.rs")


def test_scan_source_code_missing_directory_gives_nothing(tmp_path):
    config = Config(project_path=tmp_path, src_dir="does_not_exist")
    assert scan_source_code(config) == []


def test_scan_source_code_custom_src_dir(tmp_path):
    _write(tmp_path / "code" / "app.rs", 'rust_i18n::t!("ns.key");\n')
    config = Config(project_path=tmp_path, src_dir="code")
    used = scan_source_code(config)
    assert used == [UsedKey("ns.key", True, str(Path("code") / "app.rs"), 1)]