# dashboard.py
# streamlit run dashboard.py
import numpy as np
import streamlit as st
import matplotlib.pyplot as plt

from pong_autoplay import POLICIES, play_rally
from pong_render import draw_list, rasterize
from pong_sim import DEFAULT_CONFIG

# -----------------------------
# Streamlit App
# -----------------------------
st.set_page_config(layout="wide", page_title="Pong — Rally Viewer")
st.title("Pong — Headless Rallies vs the CPU Paddle")

st.sidebar.header("Rally settings")
seed = st.sidebar.number_input("Seed", min_value=0, value=0, step=1)
policy_name = st.sidebar.selectbox("Left paddle policy", list(POLICIES))
fps = st.sidebar.select_slider("Simulated FPS", options=[30, 60, 120, 240], value=60)
max_ticks = st.sidebar.slider("Tick budget per rally", 100, 20_000, 5000, 100)
n_rallies = st.sidebar.slider("Rallies", 1, 200, 20, 1)
scale = st.sidebar.select_slider("Frame size", options=[1, 2], value=1)

rng = np.random.default_rng(int(seed))
rallies = [play_rally(POLICIES[policy_name], rng, 1.0 / fps, max_ticks) for _ in range(n_rallies)]
shown = rallies[-1]

left, right = st.columns([1, 1])

# LEFT: final frame of the last rally
with left:
    st.subheader("Final frame (last rally)")
    frame = rasterize(draw_list(shown.final), 640 * scale, 480 * scale)
    st.image(frame, channels="RGB",
             caption=f"{shown.ticks} ticks • winner: {shown.winner if shown.winner is not None else '—'}")

    m1, m2, m3 = st.columns(3)
    winners = [r.winner for r in rallies]
    m1.metric("Player wins", f"{winners.count(0)}")
    m2.metric("CPU wins", f"{winners.count(1)}")
    m3.metric("Unfinished", f"{winners.count(None)}")

# RIGHT: trajectories
with right:
    st.subheader("Trajectories")
    traj = shown.trajectory
    field = DEFAULT_CONFIG

    fig1, ax1 = plt.subplots()
    ax1.plot(traj[:, 0], traj[:, 1], lw=1)
    ax1.add_patch(plt.Rectangle((-field.stadium_width / 2, -field.stadium_height / 2),
                                field.stadium_width, field.stadium_height, fill=False))
    ax1.set_xlim(-field.area_width / 2, field.area_width / 2)
    ax1.set_ylim(field.area_height / 2, -field.area_height / 2)  # screen y grows downward
    ax1.set_aspect("equal")
    ax1.set_xlabel("x"); ax1.set_ylabel("y")
    st.pyplot(fig1, clear_figure=True)

    st.caption("Paddle centers vs ball height")
    fig2, ax2 = plt.subplots()
    ax2.plot(traj[:, 1], label="ball y")
    ax2.plot(traj[:, 2], label="player")
    ax2.plot(traj[:, 3], label="cpu")
    ax2.set_xlabel("Tick"); ax2.set_ylabel("y")
    ax2.legend()
    st.pyplot(fig2, clear_figure=True)

    st.caption("Rally length")
    fig3, ax3 = plt.subplots()
    ax3.hist([r.ticks for r in rallies], bins=20)
    ax3.set_xlabel("Ticks"); ax3.set_ylabel("Rallies")
    st.pyplot(fig3, clear_figure=True)
