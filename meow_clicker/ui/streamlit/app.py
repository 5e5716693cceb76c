"""
Streamlit web interface for Meow Clicker.

运行方式: streamlit run meow_clicker/ui/streamlit/app.py

每次Streamlit重新运行脚本时先执行已到期的定时任务，再渲染渲染表面上的文本。
"""

import os
import sys

# 添加项目根目录到Python路径
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import streamlit as st

from meow_clicker.application import (
    ClickerRuntime,
    CollectingNotifier,
    configure_logging,
    get_config_service,
)
from meow_clicker.core.display import DisplayElements, InMemoryDisplaySurface
from meow_clicker.core.storage import MappingKeyValueStore


def initialize_session_state():
    """
    初始化会话状态，每个浏览器会话一个运行时

    会话密钥写在URL查询参数里：刷新页面会新建Streamlit会话，但密钥不变，
    持久化数据可以通过校验。新开的标签页没有该参数，按新会话处理。
    """
    if 'runtime' not in st.session_state:
        config_service = get_config_service()
        configure_logging(config_service.get_logging_config().data)

        notifier = CollectingNotifier()
        surface = InMemoryDisplaySurface()
        runtime = ClickerRuntime.from_data_file(
            session_store=MappingKeyValueStore(st.query_params),
            surface=surface,
            notifier=notifier,
            config_service=config_service,
        )
        runtime.boot()
        runtime.commands.set_visibility(True)

        st.session_state.runtime = runtime
        st.session_state.notifier = notifier
        st.session_state.surface = surface

    if 'coin_pick' not in st.session_state:
        st.session_state.coin_pick = 'heads'


def render_alerts(notifier: CollectingNotifier):
    for message in notifier.drain():
        st.error(message)


def render_counter(runtime: ClickerRuntime, surface: InMemoryDisplaySurface):
    col1, col2, col3 = st.columns([2, 1, 1])
    with col1:
        st.metric("🐱 Meows", surface.read(DisplayElements.MEOWS) or "0")
        if st.button("Meow!", key="click", use_container_width=True):
            runtime.commands.click()
            st.rerun()
    with col2:
        st.metric("Multiplier", surface.read(DisplayElements.MULTIPLIER) or "1.00×")
    with col3:
        st.metric("Clicks/s", surface.read(DisplayElements.CLICKS_PER_SEC) or "0.0")


def render_shop(runtime: ClickerRuntime):
    st.subheader("Shop")
    items = runtime.queries.get_shop_view().data
    for item in items:
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown(f"**{item.title}** — {item.desc} • {item.price} meows")
        with col2:
            label = "Bought" if item.owned else "Buy"
            if st.button(label, key=f"buy_{item.id}", disabled=item.owned):
                runtime.commands.buy_upgrade(item.id)
                st.rerun()

    if st.button("Reset upgrades", key="reset_upgrades"):
        runtime.commands.reset_upgrades()
        st.rerun()


def render_casino(runtime: ClickerRuntime):
    st.subheader("Coinflip")
    casino = get_config_service().get_casino_config().data
    pick = st.radio("Pick", ["heads", "tails"], key="coin_pick", horizontal=True)
    bet = st.number_input("Bet", min_value=0, max_value=casino.max_bet,
                          value=casino.min_bet, step=casino.bet_step, key="bet_input")
    if st.button("Flip", key="coinflip"):
        runtime.commands.place_bet(pick, bet)
        st.rerun()
    for line in runtime.queries.get_casino_log().data:
        st.caption(line)


def render_stats(runtime: ClickerRuntime, surface: InMemoryDisplaySurface):
    st.subheader("Stats")
    col1, col2, col3 = st.columns(3)
    col1.metric("Total earned", surface.read(DisplayElements.TOTAL_EARNED) or "0")
    col2.metric("Total spent", surface.read(DisplayElements.TOTAL_SPENT) or "0")
    col3.metric("Time played", surface.read(DisplayElements.TIME_PLAYED) or "0s")
    st.text(surface.read(DisplayElements.OWNED_LIST) or "")
    st.download_button(
        "Export stats",
        data=runtime.export_stats(),
        file_name="shelby_cleo_stats.json",
        mime="application/json",
    )


def main():
    st.set_page_config(page_title="Shelby & Cleo Meow Clicker", page_icon="🐱")
    initialize_session_state()

    runtime: ClickerRuntime = st.session_state.runtime
    surface: InMemoryDisplaySurface = st.session_state.surface

    runtime.pump()

    st.title("Shelby & Cleo Meow Clicker")
    render_alerts(st.session_state.notifier)

    lock_status = runtime.queries.get_lock_status().data
    if lock_status.locked:
        st.warning("Account locked due to suspicious activity. Refresh to attempt reload.")

    counter_tab, shop_tab, casino_tab, stats_tab = st.tabs(["Clicker", "Shop", "Casino", "Stats"])
    with counter_tab:
        render_counter(runtime, surface)
    with shop_tab:
        render_shop(runtime)
    with casino_tab:
        render_casino(runtime)
    with stats_tab:
        render_stats(runtime, surface)


if __name__ == "__main__":
    main()
